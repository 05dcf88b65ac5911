from __future__ import annotations


class ActivityError(Exception):
    """Base class for every error raised by activity_timer."""


class InvalidArgumentError(ActivityError, ValueError):
    pass


class ActivityNotFoundError(ActivityError, LookupError):
    def __init__(self, activity_id: object) -> None:
        super().__init__(f'activity with id "{activity_id}" not found.')
        self.activity_id = activity_id


class NoHandlersError(ActivityError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("No output handlers defined.")
