"""Git repository discovery for workspaces."""

import os
from pathlib import Path

GIT_DIR_NAME = ".git"


def is_git_repo(workspace: str | Path) -> bool:
    """Check if a workspace root holds a ``.git`` entry."""
    return (Path(workspace) / GIT_DIR_NAME).exists()


def find_git_root(start: str | Path | None = None) -> str:
    """
    Walk up from a directory to the nearest one holding ``.git``.

    Args:
        start: Directory to start from (current working directory if None)

    Returns:
        The repository root, or an empty string if none is found
    """
    try:
        current = Path(start) if start is not None else Path(os.getcwd())
    except OSError:
        return ""

    for directory in (current, *current.parents):
        if (directory / GIT_DIR_NAME).exists():
            return str(directory)
    return ""
