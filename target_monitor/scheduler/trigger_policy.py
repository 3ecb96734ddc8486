"""
Trigger policy: whether a cycle should start at a given moment.
"""

import logging
from datetime import datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from croniter import croniter

from ..config.config_manager import ConfigurationError


logger = logging.getLogger(__name__)

HolidayPredicate = Callable[[datetime], bool]

SECONDS_AT_ZERO = ("0", "00")


class InvalidScheduleError(ConfigurationError):
    """Raised for a cron expression that cannot be parsed."""


def validate_cron_expression(cron_expression: str) -> str:
    """
    Check that a cron expression is a valid schedule.

    Five-field expressions are used as-is. Six-field expressions with a leading
    seconds field (as in "0 0 9-15 * * 1-5") are accepted when the seconds
    field is 0 and converted to the five-field form, since ticks are evaluated
    at minute precision.

    Returns:
        The stripped five-field expression

    Raises:
        InvalidScheduleError: If croniter cannot parse it
    """
    if not isinstance(cron_expression, str) or not cron_expression.strip():
        raise InvalidScheduleError("Cron expression must be a non-empty string")

    fields = cron_expression.split()
    if len(fields) == 6 and fields[0] in SECONDS_AT_ZERO:
        fields = fields[1:]

    expression = " ".join(fields)
    if len(fields) != 5 or not croniter.is_valid(expression):
        raise InvalidScheduleError(f"Invalid cron expression: {cron_expression!r}")
    return expression


def should_run(now: datetime, cron_expression: str, is_holiday: HolidayPredicate) -> bool:
    """
    Decide whether a cycle should run at ``now``.

    The cron expression must match ``now`` (minute precision) and ``now`` must
    not fall on a holiday. A holiday suppresses the run even when the cron
    expression matches.
    """
    if not croniter.match(cron_expression, now):
        return False

    if is_holiday(now):
        logger.info(f"[{now:%Y-%m-%d %H:%M:%S}] Today is a holiday, skipping run")
        return False

    return True


def next_fire_time(cron_expression: str, after: datetime) -> datetime:
    """First time strictly after ``after`` that matches the cron expression."""
    return croniter(cron_expression, after).get_next(datetime)


def build_clock(timezone: Optional[str] = None) -> Callable[[], datetime]:
    """Clock returning aware times in ``timezone``, or naive local time if None."""
    if timezone is None:
        return datetime.now
    zone = ZoneInfo(timezone)
    return lambda: datetime.now(zone)
