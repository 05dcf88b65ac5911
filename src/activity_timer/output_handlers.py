from __future__ import annotations

import threading
from typing import Iterable, List, Optional, Protocol

from loguru import logger as _loguru_logger

EVENT_NAME = "activity_timer"


class Handler(Protocol):
    def __call__(self, message: str) -> None: ...


class OutputHandlers:
    """Ordered list of handlers receiving formatted activity messages."""

    def __init__(self, handlers: Optional[Iterable[Handler]] = None) -> None:
        self._lock = threading.Lock()
        self._handlers: List[Handler] = list(handlers) if handlers is not None else []

    def get(self) -> List[Handler]:
        # copy, so a handler registering another handler mid-dispatch is safe
        with self._lock:
            return list(self._handlers)

    def set(self, handlers: Iterable[Handler]) -> None:
        with self._lock:
            self._handlers = list(handlers)

    def add(self, handler: Handler) -> None:
        with self._lock:
            self._handlers.append(handler)

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)


class LoguruHandler:
    """
    Output handler that emits activity messages through Loguru.

    Loguru owns sinks, formatting, rotation and filtering. Every message is
    bound with ``event="activity_timer"`` so sinks can select them:

        handler = LoguruHandler(level="DEBUG")
        handler.add_event_sink("activities.log", rotation="10 MB")
    """

    def __init__(self, level: str = "INFO", *, logger=None) -> None:
        self._logger = logger if logger is not None else _loguru_logger
        self._lock = threading.Lock()
        self.level = str(level)
        self._event_sink_ids: List[int] = []

    @property
    def logger(self):
        return self._logger

    def __call__(self, message: str) -> None:
        # raw message body; braces in activity names must not be re-formatted
        self._logger.bind(event=EVENT_NAME).log(self.level, "{}", message)

    def add_event_sink(self, sink, **add_kwargs) -> int:
        """Add a Loguru sink that receives ONLY activity timer events."""
        def _only_activity_events(record) -> bool:
            return record.get("extra", {}).get("event") == EVENT_NAME

        sink_id = self._logger.add(sink, filter=_only_activity_events, **add_kwargs)
        with self._lock:
            self._event_sink_ids.append(sink_id)
        return sink_id

    def remove_event_sinks(self) -> None:
        with self._lock:
            sink_ids, self._event_sink_ids = self._event_sink_ids, []
        for sink_id in sink_ids:
            self._logger.remove(sink_id)
