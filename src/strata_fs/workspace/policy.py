"""
Name-based filters shared by the workspace scanner and the filesystem watcher.

Both traversals must agree on what is visible, otherwise a watcher event could
announce a document a fresh scan would never list.
"""

from collections.abc import Iterable

MANAGED_EXTENSION = ".md"
HIDDEN_PREFIX = "."

# Dependency, build and cache directories never worth descending into
SKIP_DIRECTORY_NAMES = frozenset({"node_modules", "target", "__pycache__"})


def should_skip_dir(name: str) -> bool:
    """Check if a directory is hidden or on the deny-list."""
    return name.startswith(HIDDEN_PREFIX) or name in SKIP_DIRECTORY_NAMES


def is_candidate_filename(name: str) -> bool:
    """Check if a file name could belong to a managed document, without reading it."""
    return name.endswith(MANAGED_EXTENSION) and not name.startswith(HIDDEN_PREFIX)


def is_within_skipped_dir(directory_parts: Iterable[str]) -> bool:
    """Check if any directory segment of a relative path is skipped."""
    return any(should_skip_dir(part) for part in directory_parts)
