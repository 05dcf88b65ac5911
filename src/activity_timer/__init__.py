"""
Activity Timer (global instance, like loguru.logger)

Usage:
    import activity_timer

    activity_id = activity_timer.start("build")   # logs "build" via Loguru
    ...
    activity_timer.end(activity_id)               # logs "build (1520ms)"

    activity_timer.set_output_handlers([print])   # send messages elsewhere
    activity_timer.disable()                      # silence all output
"""

from .errors import ActivityError, ActivityNotFoundError, InvalidArgumentError, NoHandlersError
from .formatters import Formatter, default_end_formatter, default_start_formatter
from .output_handlers import Handler, LoguruHandler, OutputHandlers
from .store import Activity, ActivityStore
from .timer import ActivityTimer

# Global, single timer instance writing to Loguru
activity_timer = ActivityTimer(handlers=[LoguruHandler()])

create = activity_timer.create
get = activity_timer.get
mark = activity_timer.mark
destroy = activity_timer.destroy
start = activity_timer.start
end = activity_timer.end
track = activity_timer.track
enable = activity_timer.enable
disable = activity_timer.disable
configure = activity_timer.configure
set_start_formatter = activity_timer.set_start_formatter
set_end_formatter = activity_timer.set_end_formatter
get_output_handlers = activity_timer.get_output_handlers
set_output_handlers = activity_timer.set_output_handlers
add_output_handler = activity_timer.add_output_handler

__all__ = [
    "Activity",
    "ActivityError",
    "ActivityNotFoundError",
    "ActivityStore",
    "ActivityTimer",
    "Formatter",
    "Handler",
    "InvalidArgumentError",
    "LoguruHandler",
    "NoHandlersError",
    "OutputHandlers",
    "activity_timer",
    "add_output_handler",
    "configure",
    "create",
    "default_end_formatter",
    "default_start_formatter",
    "destroy",
    "disable",
    "enable",
    "end",
    "get",
    "get_output_handlers",
    "mark",
    "set_end_formatter",
    "set_output_handlers",
    "set_start_formatter",
    "start",
    "track",
]
