"""Domain events: immutable records of what happened to a repository."""

import dataclasses
import enum
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union, get_args, get_origin

from gitdomain.identifiers import GraphId, RepositoryId

EVENT_TYPE_KEY = "event_type"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class FileChangeType(enum.Enum):
    """How a file was changed by a commit."""

    ADDED = "Added"
    MODIFIED = "Modified"
    DELETED = "Deleted"
    RENAMED = "Renamed"


@dataclass(frozen=True)
class FileChangeInfo:
    """A file touched by a commit, with line counts."""

    path: str
    change_type: FileChangeType
    additions: int
    deletions: int


@dataclass(frozen=True)
class RepositoryCloned:
    """A repository was cloned to a local path."""

    repository_id: RepositoryId
    remote_url: str
    local_path: str
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class CommitAnalyzed:
    """A commit was analyzed.

    ``author`` maps ``"name"`` and ``"email"`` to the author's details.
    """

    repository_id: RepositoryId
    commit_hash: str
    parents: List[str]
    author: Dict[str, str]
    message: str
    files_changed: List[FileChangeInfo]
    commit_timestamp: datetime
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class BranchCreated:
    """A branch was created pointing at a commit."""

    repository_id: RepositoryId
    branch_name: str
    commit_hash: str
    source_branch: Optional[str] = None
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class BranchDeleted:
    """A branch was deleted."""

    repository_id: RepositoryId
    branch_name: str
    last_commit: str
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class TagCreated:
    """A tag was created; message and tagger are set for annotated tags."""

    repository_id: RepositoryId
    tag_name: str
    commit_hash: str
    message: Optional[str] = None
    tagger: Optional[Dict[str, str]] = None
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class CommitGraphExtracted:
    """A commit graph was extracted into the graph domain."""

    repository_id: RepositoryId
    graph_id: GraphId
    commit_count: int
    edge_count: int
    root_commits: List[str]
    head_commits: List[str]
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class DependencyGraphExtracted:
    """A file dependency graph was extracted into the graph domain."""

    repository_id: RepositoryId
    graph_id: GraphId
    commit_hash: str
    file_count: int
    dependency_count: int
    language: Optional[str] = None
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class MetadataUpdates:
    """Repository metadata fields that changed; None means unchanged."""

    description: Optional[str] = None
    primary_language: Optional[str] = None
    size_bytes: Optional[int] = None
    commit_count: Optional[int] = None
    custom: Any = None


@dataclass(frozen=True)
class RepositoryMetadataUpdated:
    """Repository metadata was updated."""

    repository_id: RepositoryId
    updates: MetadataUpdates
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class MergeDetected:
    """A merge commit was detected."""

    repository_id: RepositoryId
    merge_commit: str
    parents: List[str]
    branches: List[str] = field(default_factory=list)
    merge_strategy: Optional[str] = None
    conflicts: List[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class FileMetrics:
    """Measurements of a single file."""

    lines_of_code: int
    function_count: Optional[int]
    complexity: Optional[int]
    language: Optional[str]
    size_bytes: int


@dataclass(frozen=True)
class FileAnalyzed:
    """A file was analyzed at a commit."""

    repository_id: RepositoryId
    file_path: str
    commit_hash: str
    metrics: FileMetrics
    dependencies: List[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class RepositoryAnalyzed:
    """A repository on disk was analyzed."""

    repository_id: RepositoryId
    path: str
    name: str
    branch_count: int
    commit_count: int
    timestamp: datetime = field(default_factory=_now)


GitDomainEvent = Union[
    RepositoryCloned,
    CommitAnalyzed,
    BranchCreated,
    BranchDeleted,
    TagCreated,
    CommitGraphExtracted,
    DependencyGraphExtracted,
    RepositoryMetadataUpdated,
    MergeDetected,
    FileAnalyzed,
    RepositoryAnalyzed,
]

_EVENT_TYPES: Dict[str, type] = {cls.__name__: cls for cls in get_args(GitDomainEvent)}


def _encode(value: Any) -> Any:
    if isinstance(value, (RepositoryId, GraphId)):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _encode(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items()}
    return value


def _decode(tp: Any, value: Any) -> Any:
    if tp is Any:
        return value
    origin = get_origin(tp)
    if origin is Union:
        if value is None:
            return None
        inner = [arg for arg in get_args(tp) if arg is not type(None)]
        return _decode(inner[0], value)
    if origin is list:
        (item_type,) = get_args(tp)
        return [_decode(item_type, item) for item in value]
    if origin is dict:
        _, item_type = get_args(tp)
        return {key: _decode(item_type, item) for key, item in value.items()}
    if tp in (RepositoryId, GraphId):
        return tp.from_uuid(value)
    if tp is datetime:
        return datetime.fromisoformat(value)
    if isinstance(tp, type) and issubclass(tp, enum.Enum):
        return tp(value)
    if dataclasses.is_dataclass(tp):
        return _decode_dataclass(tp, value)
    return value


def _decode_dataclass(cls: type, data: Dict[str, Any]) -> Any:
    kwargs = {
        f.name: _decode(f.type, data[f.name])
        for f in dataclasses.fields(cls)
        if f.name in data
    }
    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise ValueError(f"invalid {cls.__name__} data: {exc}") from exc


def event_to_dict(event: GitDomainEvent) -> Dict[str, Any]:
    """Encode an event as a JSON-compatible dict tagged with its event type."""
    name = type(event).__name__
    if _EVENT_TYPES.get(name) is not type(event):
        raise TypeError(f"not a Git domain event: {type(event).__name__}")
    encoded = _encode(event)
    return {EVENT_TYPE_KEY: name, **encoded}


def event_from_dict(data: Dict[str, Any]) -> GitDomainEvent:
    """Decode an event produced by :func:`event_to_dict`."""
    fields = dict(data)
    name = fields.pop(EVENT_TYPE_KEY, None)
    if name is None:
        raise ValueError(f"missing {EVENT_TYPE_KEY!r} key")
    cls = _EVENT_TYPES.get(name)
    if cls is None:
        raise ValueError(f"unknown event type: {name!r}")
    return _decode_dataclass(cls, fields)


def event_to_json(event: GitDomainEvent) -> str:
    """Serialize an event to a JSON string."""
    return json.dumps(event_to_dict(event))


def event_from_json(text: str) -> GitDomainEvent:
    """Deserialize an event from a JSON string."""
    return event_from_dict(json.loads(text))