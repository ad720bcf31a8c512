"""Data models and exceptions for the change-detection system."""

from strata_fs.models.events import FsChangeEvent, FsEventKind, RawEventKind, RawFsEvent, WatchState
from strata_fs.models.exceptions import (
    BaseError,
    ConfigurationError,
    FileOperationError,
    MonitoringError,
    ScanError,
)

__all__ = [
    "FsChangeEvent",
    "FsEventKind",
    "RawEventKind",
    "RawFsEvent",
    "WatchState",
    "BaseError",
    "ConfigurationError",
    "FileOperationError",
    "MonitoringError",
    "ScanError",
]
