"""
Data models for filesystem change events.

Raw events are what the watchdog observer hands to the processing queue;
change events are the classified domain events pushed to subscribers.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class RawEventKind(str, Enum):
    """Kind of an unclassified OS notification."""

    CREATED = "created"
    MODIFIED = "modified"
    REMOVED = "removed"


class FsEventKind(str, Enum):
    """Kind of a classified domain event."""

    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"


class WatchState(str, Enum):
    """Lifecycle state of a filesystem watcher."""

    IDLE = "idle"
    WATCHING = "watching"


class RawFsEvent(BaseModel):
    """A raw notification carrying one or more affected absolute paths."""

    kind: RawEventKind = Field(..., description="Raw notification kind")
    paths: tuple[Path, ...] = Field(..., min_length=1, description="Affected absolute paths")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        joined = ", ".join(str(path) for path in self.paths)
        return f"RawFsEvent({self.kind.value}: {joined})"


class FsChangeEvent(BaseModel):
    """
    A managed-document change, relative to the watched workspace root.

    The relative path always uses forward slashes regardless of the host
    path conventions.
    """

    kind: FsEventKind = Field(..., description="Domain event kind")
    rel_path: str = Field(..., min_length=1, description="Workspace-relative, slash-normalized path")

    model_config = ConfigDict(frozen=True)

    @field_validator('rel_path')
    @classmethod
    def normalize_separators(cls, v):
        """Ensure the relative path uses forward slashes."""
        return v.replace("\\", "/")

    @computed_field
    @property
    def channel(self) -> str:
        """Get the notification channel name, e.g. ``fs:created``."""
        return f"fs:{self.kind.value}"

    def __str__(self) -> str:
        return f"FsChangeEvent({self.kind.value}: {self.rel_path})"
