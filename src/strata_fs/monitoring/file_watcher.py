"""
File system watcher emitting managed-document change events.

Watches one workspace tree at a time. The watchdog observer thread only turns
OS notifications into raw events on a queue; a dedicated worker thread per
session filters, deduplicates against the write guard, classifies and hands
the resulting domain events to subscribers.
"""

import itertools
import logging
import os
import queue
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from strata_fs.config import WatchConfig, get_config
from strata_fs.models import FsChangeEvent, FsEventKind, MonitoringError, RawEventKind, RawFsEvent, WatchState
from strata_fs.monitoring.write_guard import WriteGuard
from strata_fs.parsers.document_classifier import DocumentClassifier
from strata_fs.workspace.policy import is_candidate_filename, is_within_skipped_dir

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[FsChangeEvent], Any]

_session_ids = itertools.count(1)


class WorkspaceEventHandler(FileSystemEventHandler):
    """Translates watchdog file events into raw events for a session queue."""

    def __init__(self, sink: Callable[[RawFsEvent], None]):
        super().__init__()
        self._sink = sink

    def on_created(self, event: FileSystemEvent) -> None:
        """Handle file creation events."""
        if not event.is_directory:
            self._emit(RawEventKind.CREATED, event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        """Handle file modification events."""
        if not event.is_directory:
            self._emit(RawEventKind.MODIFIED, event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        """Handle file deletion events."""
        if not event.is_directory:
            self._emit(RawEventKind.REMOVED, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        """Handle file move events."""
        if hasattr(event, 'dest_path') and not event.is_directory:
            # Treat moves as delete + create
            self._emit(RawEventKind.REMOVED, event.src_path)
            self._emit(RawEventKind.CREATED, event.dest_path)

    def _emit(self, kind: RawEventKind, raw_path: str | bytes) -> None:
        self._sink(RawFsEvent(kind=kind, paths=(Path(os.fsdecode(raw_path)),)))


class WatchSession:
    """
    One live recursive watch on a workspace root.

    Owns the watchdog observer, the inbound queue and the worker thread that
    drains it. Once closed, the worker delivers nothing further.
    """

    def __init__(
        self,
        root: Path,
        process: Callable[["WatchSession", RawFsEvent], None],
        join_timeout: float = 5.0,
    ):
        self.session_id = next(_session_ids)
        self.root = root
        self.join_timeout = join_timeout
        self._process = process
        self._queue: queue.Queue[RawFsEvent | None] = queue.Queue()
        self._closed = threading.Event()
        self._observer: Observer | None = None
        self._worker: threading.Thread | None = None

    def open(self) -> None:
        """
        Schedule the recursive watch and start the observer and worker threads.

        Raises:
            OSError: If the OS refuses the watch
        """
        self._observer = Observer()
        self._observer.schedule(WorkspaceEventHandler(self.submit), str(self.root), recursive=True)
        self._observer.start()

        self._worker = threading.Thread(
            target=self._run, name=f"strata-fs-session-{self.session_id}", daemon=True
        )
        self._worker.start()

    def submit(self, raw: RawFsEvent) -> None:
        """Queue a raw event for processing; ignored once the session is closed."""
        if not self._closed.is_set():
            self._queue.put(raw)

    def close(self) -> None:
        """
        Stop the observer and the worker.

        Waits up to the join timeout for a notification already being
        processed to finish, unless called from a subscriber on the worker
        thread itself.

        Raises:
            MonitoringError: If the observer cannot be stopped
        """
        if self._closed.is_set():
            return
        self._closed.set()
        self._queue.put(None)

        try:
            if self._observer and self._observer.is_alive():
                self._observer.stop()
                self._observer.join(timeout=self.join_timeout)
        except Exception as e:
            logger.error("Error stopping observer for %s: %s", self.root, e)
            raise MonitoringError(
                "Failed to stop monitoring", path=str(self.root), operation="close_session", underlying_error=e
            ) from e

        if self._worker is not None and self._worker is not threading.current_thread():
            self._worker.join(timeout=self.join_timeout)
            if self._worker.is_alive():
                logger.warning("Worker for session %d still busy after %.1fs", self.session_id, self.join_timeout)

    @property
    def worker_alive(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def observer_alive(self) -> bool:
        """Check if the OS notification source is still running."""
        return self._observer is not None and bool(self._observer.is_alive())

    @property
    def pending_events(self) -> int:
        return self._queue.qsize()

    def _run(self) -> None:
        while True:
            raw = self._queue.get()
            if raw is None or self._closed.is_set():
                break
            self._process(self, raw)
        logger.debug("Worker for session %d exited", self.session_id)


class WorkspaceFileWatcher:
    """
    File system watcher for managed documents.

    Holds at most one watch session. Starting a new session always releases
    the previous one first, so switching workspaces never leaves two roots
    watched at once.
    """

    def __init__(
        self,
        write_guard: WriteGuard | None = None,
        classifier: DocumentClassifier | None = None,
        config: WatchConfig | None = None,
    ):
        """
        Initialize the file watcher.

        Args:
            write_guard: Registry of self-written paths (a private one is created if not provided)
            classifier: Document classifier used on created/modified files
            config: Watch configuration (global configuration if not provided)
        """
        self.write_guard = write_guard if write_guard is not None else WriteGuard()
        self.classifier = classifier or DocumentClassifier()
        self.config = config or get_config()

        self._session: WatchSession | None = None
        self._session_lock = threading.Lock()

        self._subscribers: list[ChangeCallback] = []
        self._subscribers_lock = threading.Lock()

        self._stats = {
            "events": {"created": 0, "modified": 0, "deleted": 0},
            "suppressed": 0,
            "dropped": 0,
        }
        self._stats_lock = threading.Lock()

    def subscribe(self, callback: ChangeCallback) -> None:
        """Register a callback receiving every emitted change event."""
        with self._subscribers_lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        """Remove a previously registered callback; unknown callbacks are ignored."""
        with self._subscribers_lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def start_watching(self, directory_path: str | Path) -> None:
        """
        Start watching a workspace, replacing any active session.

        Args:
            directory_path: Root directory to monitor recursively

        Raises:
            MonitoringError: If monitoring cannot be started; the watcher is then idle
        """
        directory_path = Path(directory_path)

        with self._session_lock:
            previous, self._session = self._session, None
            if previous is not None:
                logger.info("Releasing watch on %s", previous.root)
                previous.close()

            if not directory_path.exists():
                raise MonitoringError(
                    f"Directory does not exist: {directory_path}", path=str(directory_path), operation="start_watching"
                )

            if not directory_path.is_dir():
                raise MonitoringError(
                    f"Path is not a directory: {directory_path}", path=str(directory_path), operation="start_watching"
                )

            session = WatchSession(
                directory_path.resolve(), self._process_queued, join_timeout=self.config.observer_join_timeout
            )
            try:
                session.open()
            except Exception as e:
                logger.error("Failed to start file monitoring for %s: %s", directory_path, e)
                session.close()
                raise MonitoringError(
                    f"Failed to start monitoring: {e}",
                    path=str(directory_path),
                    operation="start_watching",
                    underlying_error=e,
                ) from e

            self._session = session
            logger.info("Started monitoring %s", session.root)

    def stop_watching(self) -> None:
        """Stop the active session, if any."""
        with self._session_lock:
            session, self._session = self._session, None

        if session is None:
            logger.debug("Monitoring not active, nothing to stop")
            return

        session.close()
        logger.info("Stopped monitoring %s", session.root)

    def submit_raw_event(self, raw: RawFsEvent) -> None:
        """
        Queue a raw event on the active session as if the OS had reported it.

        Raises:
            MonitoringError: If no session is active
        """
        self._require_session("submit_raw_event").submit(raw)

    def process_raw_event(self, raw: RawFsEvent) -> list[FsChangeEvent]:
        """
        Run a raw event through the pipeline synchronously and dispatch the results.

        Args:
            raw: Raw notification against the active session's root

        Returns:
            The emitted change events

        Raises:
            MonitoringError: If no session is active
        """
        session = self._require_session("process_raw_event")
        events = self.evaluate(raw, session.root)
        for event in events:
            self._dispatch_event(event)
        return events

    def evaluate(self, raw: RawFsEvent, root: Path) -> list[FsChangeEvent]:
        """
        Turn a raw notification into domain events, one decision per affected path.

        Consumes write-guard entries as a side effect but does not dispatch.
        """
        events = []
        for path in raw.paths:
            event = self._evaluate_path(raw.kind, Path(path), root)
            if event is not None:
                events.append(event)
        return events

    def _evaluate_path(self, kind: RawEventKind, path: Path, root: Path) -> FsChangeEvent | None:
        if not is_candidate_filename(path.name):
            return None

        try:
            relative = path.relative_to(root)
        except ValueError:
            logger.debug("Ignoring %s outside watched root %s", path, root)
            return None

        if is_within_skipped_dir(relative.parts[:-1]):
            logger.debug("Ignoring %s inside a skipped directory", path)
            return None

        if self.write_guard.consume(path):
            logger.debug("Suppressed self-write echo for %s", path)
            with self._stats_lock:
                self._stats["suppressed"] += 1
            return None

        rel_path = relative.as_posix()

        if kind is RawEventKind.REMOVED:
            # Content is gone, so removal is reported without classification
            return FsChangeEvent(kind=FsEventKind.DELETED, rel_path=rel_path)

        if not self.classifier.is_managed_document(path):
            logger.debug("Ignoring %s event for unmanaged file %s", kind.value, path)
            return None

        event_kind = FsEventKind.CREATED if kind is RawEventKind.CREATED else FsEventKind.MODIFIED
        return FsChangeEvent(kind=event_kind, rel_path=rel_path)

    def _process_queued(self, session: WatchSession, raw: RawFsEvent) -> None:
        try:
            events = self.evaluate(raw, session.root)
        except Exception as e:
            with self._stats_lock:
                self._stats["dropped"] += 1
            logger.error("Dropped notification %s: %s", raw, e)
            return

        for event in events:
            if session.closed:
                return
            self._dispatch_event(event)

    def _dispatch_event(self, event: FsChangeEvent) -> None:
        with self._stats_lock:
            self._stats["events"][event.kind.value] += 1

        with self._subscribers_lock:
            subscribers = list(self._subscribers)

        logger.debug("Emitting %s", event)
        for callback in subscribers:
            try:
                callback(event)
            except Exception as e:
                logger.error("Error dispatching %s event for %s: %s", event.kind.value, event.rel_path, e)

    def _require_session(self, operation: str) -> WatchSession:
        with self._session_lock:
            session = self._session
        if session is None:
            raise MonitoringError("No active watch session", operation=operation)
        return session

    @property
    def state(self) -> WatchState:
        """Get the current lifecycle state."""
        with self._session_lock:
            return WatchState.WATCHING if self._session is not None else WatchState.IDLE

    @property
    def is_watching(self) -> bool:
        """Check if a watch session is active."""
        return self.state is WatchState.WATCHING

    @property
    def watched_root(self) -> Path | None:
        """Get the root of the active session."""
        with self._session_lock:
            return self._session.root if self._session is not None else None

    def get_stats(self) -> dict[str, Any]:
        """Get counts of emitted, suppressed and dropped notifications."""
        with self._stats_lock:
            return {
                "events": dict(self._stats["events"]),
                "suppressed": self._stats["suppressed"],
                "dropped": self._stats["dropped"],
            }

    def get_status(self) -> dict[str, Any]:
        """
        Get the watcher state together with session details and statistics.

        ``observer_alive`` turning false while the state is still watching means
        the OS notification source failed and the caller should start again.
        """
        with self._session_lock:
            session = self._session

        return {
            "state": WatchState.WATCHING.value if session is not None else WatchState.IDLE.value,
            "watched_root": str(session.root) if session is not None else None,
            "observer_alive": session.observer_alive if session is not None else False,
            "pending_events": session.pending_events if session is not None else 0,
            "stats": self.get_stats(),
        }
