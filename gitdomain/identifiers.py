"""Opaque UUID-backed identifiers for repositories and graphs."""

from __future__ import annotations

import uuid as _uuid
from dataclasses import dataclass, field
from typing import Union


def _coerce_uuid(value: Union[_uuid.UUID, str]) -> _uuid.UUID:
    if isinstance(value, _uuid.UUID):
        return value
    if isinstance(value, str):
        return _uuid.UUID(value)
    raise TypeError(f"expected a UUID or string, got {type(value).__name__}")


@dataclass(frozen=True)
class RepositoryId:
    """Unique identifier for a repository."""

    value: _uuid.UUID = field(default_factory=_uuid.uuid4)

    @classmethod
    def new(cls) -> RepositoryId:
        """Create an identifier from a fresh random UUID."""
        return cls(_uuid.uuid4())

    @classmethod
    def from_uuid(cls, uuid: Union[_uuid.UUID, str]) -> RepositoryId:
        """Wrap an existing UUID (or its canonical string form)."""
        return cls(_coerce_uuid(uuid))

    @property
    def uuid(self) -> _uuid.UUID:
        """The wrapped UUID."""
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class GraphId:
    """Unique identifier for a graph."""

    value: _uuid.UUID = field(default_factory=_uuid.uuid4)

    @classmethod
    def new(cls) -> GraphId:
        """Create an identifier from a fresh random UUID."""
        return cls(_uuid.uuid4())

    @classmethod
    def from_uuid(cls, uuid: Union[_uuid.UUID, str]) -> GraphId:
        """Wrap an existing UUID (or its canonical string form)."""
        return cls(_coerce_uuid(uuid))

    @property
    def uuid(self) -> _uuid.UUID:
        """The wrapped UUID."""
        return self.value

    def __str__(self) -> str:
        return str(self.value)