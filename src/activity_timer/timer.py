from __future__ import annotations

import contextlib
import threading
from typing import Callable, Iterable, List, Optional

from .errors import NoHandlersError
from .formatters import Formatter, default_end_formatter, default_start_formatter
from .output_handlers import Handler, OutputHandlers
from .store import Activity, ActivityStore


class _ActivityContext:
    def __init__(self, timer: "ActivityTimer", message: str) -> None:
        self._timer = timer
        self._message = message
        self.activity_id: Optional[int] = None
        self.activity: Optional[Activity] = None

    def __enter__(self) -> "_ActivityContext":
        self.activity_id = self._timer.start(self._message)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self.activity_id is None:
            return False
        if exc_type is not None:
            # the block's exception wins over a failing end message
            with contextlib.suppress(Exception):
                self.activity = self._timer.end(self.activity_id)
            return False
        self.activity = self._timer.end(self.activity_id)
        return False  # never swallow exceptions


class ActivityTimer:
    """
    Named activities with start/end messages written to output handlers.

        timer = ActivityTimer(handlers=[print])
        activity_id = timer.start("build")
        ...
        timer.end(activity_id)        # prints "build (1520ms)"

    Notes:
    - Timer owns: activity store, formatter slots, enabled flag
    - Handlers own: where the formatted messages go
    - Errors from handlers and formatters propagate; a failing handler
      stops dispatch to the handlers registered after it
    """

    def __init__(
        self,
        *,
        handlers: Optional[Iterable[Handler]] = None,
        start_formatter: Optional[Formatter] = None,
        end_formatter: Optional[Formatter] = None,
        enabled: bool = True,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._lock = threading.Lock()
        self._store = ActivityStore(clock=clock)
        self._handlers = OutputHandlers(handlers)
        self._start_formatter: Formatter = start_formatter or default_start_formatter
        self._end_formatter: Formatter = end_formatter or default_end_formatter
        self._enabled = bool(enabled)

    # -----------------------------
    # Store
    # -----------------------------
    @property
    def store(self) -> ActivityStore:
        return self._store

    def create(self, message: Optional[str] = None) -> int:
        """Register an activity without starting it. Returns its ID."""
        return self._store.create(message)

    def get(self, activity_id: int) -> Activity:
        return self._store.get(activity_id)

    def mark(self, activity_id: int) -> int:
        """Append the current time (ms since epoch) to the activity and return it."""
        return self._store.mark(activity_id)

    def destroy(self, activity_id: int) -> Activity:
        return self._store.destroy(activity_id)

    # -----------------------------
    # Lifecycle
    # -----------------------------
    def start(self, message: Optional[str] = None) -> int:
        activity_id = self._store.create(message)
        self._store.mark(activity_id)
        self.write(self._current_start_formatter(), self._store.get(activity_id))
        return activity_id

    def end(self, activity_id: int) -> Activity:
        """
        Mark the final timestamp, remove the activity and write its end message.

        The ended activity is returned; the timer keeps no reference to it.
        """
        self._store.mark(activity_id)
        activity = self._store.destroy(activity_id)
        self.write(self._current_end_formatter(), activity)
        return activity

    def track(self, message: str) -> _ActivityContext:
        """
        Context manager running ``start`` on enter and ``end`` on exit.

            with timer.track("LOAD_DATA") as ctx:
                ...
            ctx.activity.elapsed_ms
        """
        return _ActivityContext(self, message)

    # -----------------------------
    # Output
    # -----------------------------
    def write(self, formatter: Formatter, activity: Activity) -> None:
        if not self.enabled:
            return

        handlers = self._handlers.get()
        if not handlers:
            raise NoHandlersError()

        message = formatter(activity)
        for handler in handlers:
            handler(message)

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def set_start_formatter(self, formatter: Formatter) -> None:
        with self._lock:
            self._start_formatter = formatter

    def set_end_formatter(self, formatter: Formatter) -> None:
        with self._lock:
            self._end_formatter = formatter

    def _current_start_formatter(self) -> Formatter:
        with self._lock:
            return self._start_formatter

    def _current_end_formatter(self) -> Formatter:
        with self._lock:
            return self._end_formatter

    def get_output_handlers(self) -> List[Handler]:
        return self._handlers.get()

    def set_output_handlers(self, handlers: Iterable[Handler]) -> None:
        self._handlers.set(handlers)

    def add_output_handler(self, handler: Handler) -> None:
        self._handlers.add(handler)

    def configure(
        self,
        *,
        enabled: Optional[bool] = None,
        start_formatter: Optional[Formatter] = None,
        end_formatter: Optional[Formatter] = None,
        handlers: Optional[Iterable[Handler]] = None,
    ) -> "ActivityTimer":
        """
        Configure timer-owned behavior. Arguments left as None are unchanged.

        enabled:
            Gate for all output.
        start_formatter / end_formatter:
            Replace the formatter used by subsequent start/end calls.
        handlers:
            Replace the whole output handler list.
        """
        with self._lock:
            if enabled is not None:
                self._enabled = bool(enabled)
            if start_formatter is not None:
                self._start_formatter = start_formatter
            if end_formatter is not None:
                self._end_formatter = end_formatter
        if handlers is not None:
            self._handlers.set(handlers)
        return self
