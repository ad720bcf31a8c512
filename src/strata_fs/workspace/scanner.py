"""
Workspace scanner enumerating managed documents under a root directory.

Performs a depth-first walk that honours the shared skip policy, classifies
every candidate markdown file, and returns workspace-relative paths with
forward slashes in sorted order.
"""

import logging
import os
from pathlib import Path

from strata_fs.models.exceptions import ScanError
from strata_fs.parsers.document_classifier import DocumentClassifier
from strata_fs.workspace.policy import is_candidate_filename, should_skip_dir

logger = logging.getLogger(__name__)


class WorkspaceScanner:
    """
    Recursive scanner for managed documents.

    A directory that cannot be listed fails the whole scan; a file that cannot
    be read is simply not a document.
    """

    def __init__(self, classifier: DocumentClassifier | None = None):
        """
        Initialize the scanner.

        Args:
            classifier: Document classifier (a default one is created if not provided)
        """
        self.classifier = classifier or DocumentClassifier()

    def list_documents(self, workspace: str | Path) -> list[str]:
        """
        List every managed document under a workspace.

        Args:
            workspace: Root directory of the workspace

        Returns:
            Sorted workspace-relative paths using forward slashes

        Raises:
            ScanError: If any directory in the tree cannot be listed
        """
        base = Path(workspace)
        files: list[str] = []

        self._walk(base, base, files)
        files.sort()

        logger.debug("Scanned %s: %d managed documents", base, len(files))
        return files

    def _walk(self, base: Path, directory: Path, files: list[str]) -> None:
        try:
            with os.scandir(directory) as entries:
                children = list(entries)
        except OSError as e:
            logger.error("Cannot list directory %s: %s", directory, e)
            raise ScanError(
                f"Cannot list directory {directory}: {e}",
                path=str(directory),
                workspace=str(base),
                underlying_error=e,
            ) from e

        for entry in children:
            if entry.is_dir():
                if not should_skip_dir(entry.name):
                    self._walk(base, Path(entry.path), files)
            elif is_candidate_filename(entry.name) and self.classifier.is_managed_document(entry.path):
                files.append(Path(entry.path).relative_to(base).as_posix())


def list_workspace_files(workspace: str | Path) -> list[str]:
    """List managed documents under a workspace with a default scanner."""
    return WorkspaceScanner().list_documents(workspace)
