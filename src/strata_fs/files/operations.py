"""
Plain file operations on workspace documents.

Every operation that changes a file registers the affected paths with the
write guard before touching the disk, so the watcher does not report the
application's own writes back to it.
"""

import logging
from pathlib import Path

from strata_fs.models.exceptions import FileOperationError
from strata_fs.monitoring.write_guard import WriteGuard

logger = logging.getLogger(__name__)


class FileOperations:
    """Read, write, delete and rename files, marking self-writes on the shared guard."""

    def __init__(self, write_guard: WriteGuard, encoding: str = "utf-8"):
        self.write_guard = write_guard
        self.encoding = encoding

    def read_file(self, path: str | Path) -> str:
        """
        Read a file as text.

        Raises:
            FileOperationError: If the file cannot be read or decoded
        """
        try:
            return Path(path).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise FileOperationError(
                f"Failed to read {path}: {e}", path=str(path), operation="read_file", underlying_error=e
            ) from e

    def write_file(self, path: str | Path, content: str) -> None:
        """
        Write text to a file, replacing its content.

        Writing through a symlink changes the target, so the target is marked too.

        Raises:
            FileOperationError: If the file cannot be written
        """
        self.write_guard.mark(path)
        if Path(path).is_symlink():
            self.write_guard.mark(Path(path).resolve())
        try:
            Path(path).write_text(content, encoding=self.encoding)
        except OSError as e:
            raise FileOperationError(
                f"Failed to write {path}: {e}", path=str(path), operation="write_file", underlying_error=e
            ) from e
        logger.debug("Wrote %s (%d chars)", path, len(content))

    def delete_file(self, path: str | Path) -> None:
        """
        Remove a file.

        Raises:
            FileOperationError: If the file cannot be removed
        """
        self.write_guard.mark(path)
        try:
            Path(path).unlink()
        except OSError as e:
            raise FileOperationError(
                f"Failed to delete {path}: {e}", path=str(path), operation="delete_file", underlying_error=e
            ) from e
        logger.debug("Deleted %s", path)

    def rename_file(self, old_path: str | Path, new_path: str | Path) -> None:
        """
        Rename a file, marking both the old and the new path.

        Raises:
            FileOperationError: If the rename fails
        """
        self.write_guard.mark(old_path)
        self.write_guard.mark(new_path)
        try:
            Path(old_path).rename(new_path)
        except OSError as e:
            raise FileOperationError(
                f"Failed to rename {old_path} to {new_path}: {e}",
                path=str(old_path),
                operation="rename_file",
                underlying_error=e,
            ) from e
        logger.debug("Renamed %s -> %s", old_path, new_path)

    def ensure_dir(self, path: str | Path) -> None:
        """Create a directory and its parents if missing."""
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(
                f"Failed to create directory {path}: {e}", path=str(path), operation="ensure_dir", underlying_error=e
            ) from e
