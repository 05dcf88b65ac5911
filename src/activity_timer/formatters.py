from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .store import Activity


class Formatter(Protocol):
    def __call__(self, activity: "Activity") -> str: ...


def default_start_formatter(activity: "Activity") -> str:
    return activity.message


def default_end_formatter(activity: "Activity") -> str:
    """Render ``"<message> (<last - first>ms)"``."""
    first = activity.timestamps[0]
    last = activity.timestamps[-1]
    return f"{activity.message} ({last - first}ms)"
