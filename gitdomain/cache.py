"""Time-limited caching of commit graph and dependency graph results."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Generic, Hashable, Optional, TypeVar, Union

from gitdomain.identifiers import GraphId, RepositoryId

_T = TypeVar("_T")

DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class _Entry(Generic[_T]):
    value: _T
    expires_at: float

    @property
    def expired(self) -> bool:
        return time.monotonic() > self.expires_at


@dataclass(frozen=True)
class DependencyInfo:
    """Cached summary of a dependency graph."""

    graph_id: GraphId
    file_count: int
    dependency_count: int


@dataclass(frozen=True)
class CacheStats:
    """Number of entries held in each cache."""

    commit_graph_entries: int
    dependency_graph_entries: int


class GitCache:
    """Thread-safe cache for expensive Git analysis results.

    Entries expire ``ttl`` after being stored; ``ttl`` is given in seconds
    or as a :class:`datetime.timedelta` and defaults to five minutes.
    """

    def __init__(self, ttl: Union[float, timedelta] = DEFAULT_TTL_SECONDS) -> None:
        if isinstance(ttl, timedelta):
            ttl = ttl.total_seconds()
        if ttl < 0:
            raise ValueError("ttl must not be negative")
        self._ttl = float(ttl)
        self._lock = threading.RLock()
        self._commit_graphs: dict[tuple[RepositoryId, Optional[Hashable]], _Entry[GraphId]] = {}
        self._dependency_graphs: dict[tuple[RepositoryId, Hashable], _Entry[DependencyInfo]] = {}

    @property
    def ttl(self) -> float:
        """Time-to-live of new entries, in seconds."""
        return self._ttl

    def _entry(self, value: _T) -> _Entry[_T]:
        return _Entry(value, time.monotonic() + self._ttl)

    def get_commit_graph(
        self, repo_id: RepositoryId, start_commit: Optional[Hashable] = None
    ) -> Optional[GraphId]:
        """Return the cached commit graph id, or None if absent or expired."""
        with self._lock:
            entry = self._commit_graphs.get((repo_id, start_commit))
        if entry is None or entry.expired:
            return None
        return entry.value

    def cache_commit_graph(
        self, repo_id: RepositoryId, start_commit: Optional[Hashable], graph_id: GraphId
    ) -> None:
        """Store a commit graph id for a repository and starting commit."""
        with self._lock:
            self._commit_graphs[(repo_id, start_commit)] = self._entry(graph_id)

    def get_dependency_graph(
        self, repo_id: RepositoryId, commit_hash: Hashable
    ) -> Optional[DependencyInfo]:
        """Return cached dependency info, or None if absent or expired."""
        with self._lock:
            entry = self._dependency_graphs.get((repo_id, commit_hash))
        if entry is None or entry.expired:
            return None
        return entry.value

    def cache_dependency_graph(
        self, repo_id: RepositoryId, commit_hash: Hashable, info: DependencyInfo
    ) -> None:
        """Store dependency info for a repository at a commit."""
        with self._lock:
            self._dependency_graphs[(repo_id, commit_hash)] = self._entry(info)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._commit_graphs.clear()
            self._dependency_graphs.clear()

    def evict_expired(self) -> None:
        """Drop entries whose time-to-live has passed."""
        with self._lock:
            self._commit_graphs = {
                k: e for k, e in self._commit_graphs.items() if not e.expired
            }
            self._dependency_graphs = {
                k: e for k, e in self._dependency_graphs.items() if not e.expired
            }

    def stats(self) -> CacheStats:
        """Count the entries currently held, expired or not."""
        with self._lock:
            return CacheStats(
                commit_graph_entries=len(self._commit_graphs),
                dependency_graph_entries=len(self._dependency_graphs),
            )