"""Aggregate roots guarding the consistency of repository state."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from gitdomain.events import (
    BranchCreated,
    CommitAnalyzed,
    GitDomainEvent,
    RepositoryCloned,
)
from gitdomain.identifiers import RepositoryId


class GitOperationError(Exception):
    """A Git operation could not be carried out."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Git operation failed: {message}")
        self.message = message


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RepositoryMetadata:
    """Descriptive information about a repository."""

    name: str
    description: Optional[str] = None
    primary_language: Optional[str] = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    size_bytes: Optional[int] = None
    commit_count: Optional[int] = None
    custom: dict[str, Any] = field(default_factory=dict)


class Repository:
    """Repository aggregate root; its state changes only by applying events."""

    def __init__(self, name: str) -> None:
        now = _now()
        self.id = RepositoryId.new()
        self.remote_url: Optional[str] = None
        self.local_path: Optional[str] = None
        self.head: Optional[str] = None
        self.branches: dict[str, str] = {}
        self.metadata = RepositoryMetadata(name=name, created_at=now, updated_at=now)
        self.version = 0

    def __repr__(self) -> str:
        return f"Repository(id={self.id}, name={self.metadata.name!r}, version={self.version})"

    def clone_repository(self, remote_url: str, local_path: str) -> list[GitDomainEvent]:
        """Record that the repository was cloned; it may be cloned only once."""
        if self.local_path is not None:
            raise GitOperationError("Repository already cloned")
        event = RepositoryCloned(
            repository_id=self.id, remote_url=remote_url, local_path=local_path
        )
        self.apply_event(event)
        return [event]

    def apply_event(self, event: GitDomainEvent) -> None:
        """Update state from an event and bump the version."""
        if isinstance(event, RepositoryCloned):
            self.remote_url = event.remote_url
            self.local_path = event.local_path
            self.metadata.updated_at = event.timestamp
        elif isinstance(event, CommitAnalyzed):
            self.metadata.commit_count = (self.metadata.commit_count or 0) + 1
            self.metadata.updated_at = event.timestamp
        elif isinstance(event, BranchCreated):
            self.branches[event.branch_name] = event.commit_hash
            self.metadata.updated_at = event.timestamp
        self.version += 1


class ChangeType(enum.Enum):
    """How a file was changed in a commit."""

    ADDED = "Added"
    MODIFIED = "Modified"
    DELETED = "Deleted"
    RENAMED = "Renamed"


@dataclass(frozen=True)
class FileChange:
    """A file changed in a commit."""

    path: str
    change_type: ChangeType
    additions: int
    deletions: int


@dataclass
class Commit:
    """A commit in a repository; ``author`` maps name and email."""

    repository_id: RepositoryId
    hash: str
    parents: list[str]
    author: dict[str, str]
    timestamp: datetime
    message: str
    files_changed: list[FileChange] = field(default_factory=list)


@dataclass
class BranchMetadata:
    """Timestamps and divergence counts of a branch."""

    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    ahead_count: Optional[int] = None
    behind_count: Optional[int] = None


@dataclass
class Branch:
    """A branch of a repository."""

    repository_id: RepositoryId
    name: str
    head: str
    is_default: bool = False
    metadata: BranchMetadata = field(default_factory=BranchMetadata)