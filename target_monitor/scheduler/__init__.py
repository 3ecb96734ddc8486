"""
Scheduling module deciding when a monitoring cycle runs.

Cron matching and holiday suppression live in trigger_policy and
holiday_calendar; CycleScheduler drives the recurring loop and guarantees at
most one cycle at a time.
"""

from .holiday_calendar import HolidayCalendar
from .scheduler import CycleScheduler, SchedulerState
from .trigger_policy import (
    InvalidScheduleError,
    build_clock,
    next_fire_time,
    should_run,
    validate_cron_expression,
)

__all__ = [
    "CycleScheduler",
    "HolidayCalendar",
    "InvalidScheduleError",
    "SchedulerState",
    "build_clock",
    "next_fire_time",
    "should_run",
    "validate_cron_expression",
]
