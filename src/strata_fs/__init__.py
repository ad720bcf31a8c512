"""
Change detection for Strata documents in a workspace tree.

Classifies markdown files by their frontmatter, scans workspaces for managed
documents and watches them for external changes while ignoring the
application's own writes.
"""

from strata_fs.core import WorkspaceService
from strata_fs.models import FsChangeEvent, FsEventKind

__version__ = "0.1.0"

__all__ = ["WorkspaceService", "FsChangeEvent", "FsEventKind", "__version__"]
