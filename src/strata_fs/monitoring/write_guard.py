"""
Registry of paths the application is about to write itself.

The watcher consumes entries to recognise the echo of its own writes. Each
mark is single-use: the first raw notification for a marked path removes it.

When the OS reports one logical write as several raw notifications (for
example a create followed by a modify), only the first is suppressed and the
rest surface as external changes. This is an accepted limitation; telling them
apart would need notification identities the OS does not expose.
"""

import logging
import os
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


def normalize_guard_path(path: str | Path) -> Path:
    """
    Make a path absolute and lexically normalized for use as a guard key.

    The containing directory is resolved so marks made through a symlinked
    workspace match notifications under the resolved watch root. The final
    component is kept as given: a symlinked file is keyed by the link, which is
    the path the OS reports when the link itself is written or removed.
    """
    absolute = Path(os.path.abspath(path))
    return absolute.parent.resolve() / absolute.name


class WriteGuard:
    """Lock-protected set of absolute paths about to be self-written."""

    def __init__(self):
        self._paths: set[Path] = set()
        self._lock = threading.Lock()

    def mark(self, path: str | Path) -> None:
        """
        Record a path as about to be written by the application.

        Must be called before the write is issued. Marking twice before the
        notification arrives has the same effect as marking once.
        """
        key = normalize_guard_path(path)
        with self._lock:
            self._paths.add(key)
        logger.debug("Marked self-write: %s", key)

    def consume(self, path: str | Path) -> bool:
        """
        Remove a path from the guard.

        Returns:
            True if the path was marked (suppress as self-originated)
        """
        key = normalize_guard_path(path)
        with self._lock:
            if key in self._paths:
                self._paths.remove(key)
                return True
        return False

    def clear(self) -> None:
        """Forget all pending marks."""
        with self._lock:
            self._paths.clear()

    def __contains__(self, path: str | Path) -> bool:
        key = normalize_guard_path(path)
        with self._lock:
            return key in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)
