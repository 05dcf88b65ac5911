from __future__ import annotations

import itertools
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .errors import ActivityNotFoundError, InvalidArgumentError


def wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class Activity:
    id: int
    message: str
    timestamps: List[int] = field(default_factory=list)

    @property
    def first_timestamp(self) -> Optional[int]:
        return self.timestamps[0] if self.timestamps else None

    @property
    def last_timestamp(self) -> Optional[int]:
        return self.timestamps[-1] if self.timestamps else None

    @property
    def elapsed_ms(self) -> int:
        if len(self.timestamps) < 2:
            return 0
        return self.timestamps[-1] - self.timestamps[0]


class ActivityStore:
    """
    Live activities keyed by ID.

    IDs start at 1 and are never recycled, even after ``clear()``.
    """

    def __init__(self, *, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock if clock is not None else wall_clock_ms
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._activities: Dict[int, Activity] = {}

    def create(self, message: Optional[str] = None) -> int:
        if message is None or not isinstance(message, str):
            raise InvalidArgumentError("Creating a new activity requires an activity message.")

        with self._lock:
            activity_id = next(self._ids)
            self._activities[activity_id] = Activity(id=activity_id, message=message)
        return activity_id

    def get(self, activity_id: int) -> Activity:
        with self._lock:
            activity = self._activities.get(activity_id)
        if activity is None:
            raise ActivityNotFoundError(activity_id)
        return activity

    def mark(self, activity_id: int) -> int:
        activity = self.get(activity_id)
        now = int(self._clock())
        activity.timestamps.append(now)
        return now

    def destroy(self, activity_id: int) -> Activity:
        with self._lock:
            activity = self._activities.pop(activity_id, None)
        if activity is None:
            raise ActivityNotFoundError(activity_id)
        return activity

    def clear(self) -> None:
        with self._lock:
            self._activities.clear()

    def ids(self) -> List[int]:
        with self._lock:
            return list(self._activities)

    def __len__(self) -> int:
        with self._lock:
            return len(self._activities)

    def __contains__(self, activity_id: object) -> bool:
        with self._lock:
            return activity_id in self._activities
