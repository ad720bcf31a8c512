"""
Workspace package for discovering managed documents.

Holds the skip policy shared with the watcher, the recursive scanner and
git repository discovery.
"""

from .git import find_git_root, is_git_repo
from .policy import SKIP_DIRECTORY_NAMES, is_candidate_filename, is_within_skipped_dir, should_skip_dir
from .scanner import WorkspaceScanner, list_workspace_files

__all__ = [
    "SKIP_DIRECTORY_NAMES",
    "WorkspaceScanner",
    "find_git_root",
    "is_candidate_filename",
    "is_git_repo",
    "is_within_skipped_dir",
    "list_workspace_files",
    "should_skip_dir",
]
