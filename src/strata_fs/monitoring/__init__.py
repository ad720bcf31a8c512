"""
Monitoring package for file system change detection.

This package provides the write guard that recognises the application's own
writes and the watcher that turns file system notifications into
managed-document change events.
"""

from .file_watcher import WatchSession, WorkspaceEventHandler, WorkspaceFileWatcher
from .write_guard import WriteGuard

__all__ = [
    "WatchSession",
    "WorkspaceEventHandler",
    "WorkspaceFileWatcher",
    "WriteGuard",
]
