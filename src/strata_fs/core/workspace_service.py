"""
Workspace service coordinating scanning, watching and self-write tracking.

The service is the single owner of the write guard and the watch session.
Construct it once and share it; every operation that touches the guard or
the session goes through the same instance.
"""

import logging
from pathlib import Path
from typing import Any

from strata_fs.config import WatchConfig, get_config
from strata_fs.files.operations import FileOperations
from strata_fs.monitoring.file_watcher import ChangeCallback, WorkspaceFileWatcher
from strata_fs.monitoring.write_guard import WriteGuard
from strata_fs.parsers.document_classifier import DocumentClassifier
from strata_fs.workspace.git import find_git_root, is_git_repo
from strata_fs.workspace.scanner import WorkspaceScanner

logger = logging.getLogger(__name__)


class WorkspaceService:
    """
    Entry point for the surrounding application.

    Seed the document list with :meth:`list_workspace_files`, then call
    :meth:`start_watching` and receive incremental changes through
    :meth:`subscribe`. Writes made through this service are not reported back.
    """

    def __init__(
        self,
        config: WatchConfig | None = None,
        classifier: DocumentClassifier | None = None,
        file_watcher: WorkspaceFileWatcher | None = None,
    ):
        """
        Initialize the workspace service.

        Args:
            config: Watch configuration (global configuration if not provided)
            classifier: Document classifier shared by the scanner and the watcher
            file_watcher: Optional file watcher (will create if not provided)
        """
        self.config = config or get_config()
        self.classifier = classifier or DocumentClassifier()
        self.write_guard = file_watcher.write_guard if file_watcher is not None else WriteGuard()

        self.scanner = WorkspaceScanner(self.classifier)
        self.file_watcher = file_watcher or WorkspaceFileWatcher(
            write_guard=self.write_guard, classifier=self.classifier, config=self.config
        )
        self.files = FileOperations(self.write_guard)

    # === Scanning ===

    def list_workspace_files(self, workspace: str | Path) -> list[str]:
        """
        List managed documents under a workspace.

        Raises:
            ScanError: If a directory cannot be listed
        """
        files = self.scanner.list_documents(workspace)
        logger.info("Found %d managed documents in %s", len(files), workspace)
        return files

    # === Watching ===

    def start_watching(self, workspace: str | Path) -> None:
        """
        Watch a workspace, releasing any previously watched one.

        Raises:
            MonitoringError: If the watch cannot be established
        """
        self.file_watcher.start_watching(workspace)

    def stop_watching(self) -> None:
        """Stop watching and forget pending self-write marks; a no-op when idle."""
        if not self.file_watcher.is_watching:
            return
        self.file_watcher.stop_watching()
        self.write_guard.clear()

    def subscribe(self, callback: ChangeCallback) -> None:
        """Register a callback for change events."""
        self.file_watcher.subscribe(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        """Remove a change event callback."""
        self.file_watcher.unsubscribe(callback)

    def mark_file_write(self, path: str | Path) -> None:
        """Register a path the application is about to write itself."""
        self.write_guard.mark(path)

    # === File operations ===

    def read_file(self, path: str | Path) -> str:
        return self.files.read_file(path)

    def write_file(self, path: str | Path, content: str) -> None:
        self.files.write_file(path, content)

    def delete_file(self, path: str | Path) -> None:
        self.files.delete_file(path)

    def rename_file(self, old_path: str | Path, new_path: str | Path) -> None:
        self.files.rename_file(old_path, new_path)

    def ensure_dir(self, path: str | Path) -> None:
        self.files.ensure_dir(path)

    # === Git discovery ===

    def is_git_repo(self, workspace: str | Path) -> bool:
        return is_git_repo(workspace)

    def find_git_root(self, start: str | Path | None = None) -> str:
        return find_git_root(start)

    # === Status ===

    @property
    def is_watching(self) -> bool:
        """Check if a workspace is currently watched."""
        return self.file_watcher.is_watching

    def get_status(self) -> dict[str, Any]:
        """
        Get watcher status and statistics.

        Returns:
            Dictionary with watcher state, pending self-writes and event counts
        """
        return {
            "watcher": self.file_watcher.get_status(),
            "pending_self_writes": len(self.write_guard),
        }
