"""Event sinks for the fire-and-forget ``EventPublisher`` port."""

from __future__ import annotations

import json
import queue
import threading
from datetime import datetime, timezone
from pathlib import Path

import structlog

from ims.application.event_publisher import EventPublisher

logger = structlog.get_logger(__name__)


class NullEventPublisher(EventPublisher):
    """Drops every event."""

    def publish(self, topic: str, payload: dict) -> None:
        logger.debug("event.dropped", topic=topic)


class JsonLinesEventPublisher(EventPublisher):
    """Appends one JSON record per event to a file.

    Write failures are logged and swallowed.
    """

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()

    def publish(self, topic: str, payload: dict) -> None:
        record = {
            "topic": topic,
            "published_at": datetime.now(timezone.utc).isoformat(),
            "payload": payload,
        }
        try:
            line = json.dumps(record, default=str) + "\n"
            with self._lock:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                with self._file_path.open("a", encoding="utf-8") as fh:
                    fh.write(line)
        except (OSError, TypeError, ValueError):
            logger.exception("event.publish_failed", topic=topic, sink=str(self._file_path))


class BackgroundEventPublisher(EventPublisher):
    """Hands events to a worker thread so callers never wait on the sink.

    The queue is bounded; when it is full the event is dropped and logged.
    ``close()`` drains what is already queued; events published after it
    are dropped and logged.
    """

    _STOP = object()

    def __init__(self, sink: EventPublisher, max_pending: int = 1000) -> None:
        self._sink = sink
        self._queue: queue.Queue = queue.Queue(maxsize=max_pending)
        self._closed = False
        self._close_lock = threading.Lock()
        self._worker = threading.Thread(
            target=self._run, name="ims-event-publisher", daemon=True
        )
        self._worker.start()

    def publish(self, topic: str, payload: dict) -> None:
        if self._closed:
            logger.warning("event.dropped_closed", topic=topic)
            return
        try:
            self._queue.put_nowait((topic, payload))
        except queue.Full:
            logger.warning("event.dropped_queue_full", topic=topic)

    def close(self, timeout: float | None = 5.0) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._queue.put(self._STOP)
        self._worker.join(timeout)
        self._sink.close()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is self._STOP:
                return
            topic, payload = item
            try:
                self._sink.publish(topic, payload)
            except Exception:
                logger.exception("event.publish_failed", topic=topic)
