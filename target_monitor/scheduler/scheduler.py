"""
Recurring cycle scheduler with a two-state (Idle / Running-Cycle) guard.
"""

import logging
import threading
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional

from .trigger_policy import HolidayPredicate, next_fire_time, should_run, validate_cron_expression


logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    """States of the cycle scheduler."""

    IDLE = "idle"
    RUNNING_CYCLE = "running_cycle"


class CycleScheduler:
    """
    Fires the monitoring job on a cron schedule, skipping holidays.

    Ticks that arrive while a cycle is running are dropped, never queued, so
    at most one cycle runs at a time. Both scheduled ticks and run_now() go
    through the same guard.
    """

    def __init__(
        self,
        cron_expression: str,
        job: Callable[[], Any],
        is_holiday: HolidayPredicate,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Optional[Callable[[float], Any]] = None,
        poll_interval: float = 30.0,
    ):
        self.cron_expression = validate_cron_expression(cron_expression)
        self.job = job
        self.is_holiday = is_holiday
        self.clock = clock
        self.poll_interval = poll_interval

        self.state = SchedulerState.IDLE
        self._cycle_lock = threading.Lock()
        self._stop_event = threading.Event()
        # Waiting on the stop event lets stop() interrupt a pending slice
        self.sleep = sleep or self._stop_event.wait
        self.cycles_run = 0
        self.ticks_dropped = 0

    def on_tick(self, now: datetime) -> bool:
        """
        Handle one trigger tick.

        Returns:
            True if a cycle ran for this tick
        """
        if not should_run(now, self.cron_expression, self.is_holiday):
            return False
        return self._run_guarded(now)

    def run_now(self) -> bool:
        """Run one cycle immediately, ignoring the schedule and holidays."""
        return self._run_guarded(self.clock())

    def _run_guarded(self, now: datetime) -> bool:
        if not self._cycle_lock.acquire(blocking=False):
            self.ticks_dropped += 1
            logger.warning(f"[{now:%Y-%m-%d %H:%M:%S}] A cycle is already running, dropping this tick")
            return False

        self.state = SchedulerState.RUNNING_CYCLE
        try:
            self.job()
        except Exception as e:
            logger.exception(f"Monitoring cycle raised an unexpected error: {e}")
        finally:
            self.cycles_run += 1
            self.state = SchedulerState.IDLE
            self._cycle_lock.release()
        return True

    def next_fire_times(self, count: int, after: Optional[datetime] = None) -> List[datetime]:
        """Upcoming fire times, skipping holidays."""
        current = after or self.clock()
        upcoming: List[datetime] = []
        # Bounded so an all-holiday calendar cannot loop forever
        for _ in range(count * 400):
            if len(upcoming) >= count:
                break
            current = next_fire_time(self.cron_expression, current)
            if not self.is_holiday(current):
                upcoming.append(current)
        return upcoming

    def run_forever(self) -> None:
        """Block and fire cycles on schedule until stop() is called."""
        logger.info(f"Scheduler started with schedule \"{self.cron_expression}\"")
        next_fire = next_fire_time(self.cron_expression, self.clock())
        logger.info(f"Next run at {next_fire:%Y-%m-%d %H:%M}")

        while not self._stop_event.is_set():
            now = self.clock()
            if now < next_fire:
                remaining = (next_fire - now).total_seconds()
                self.sleep(min(self.poll_interval, remaining))
                continue

            self.on_tick(next_fire)

            # Ticks that came due while the cycle ran are not replayed
            after = max(self.clock(), next_fire)
            next_fire = next_fire_time(self.cron_expression, after)
            logger.debug(f"Next run at {next_fire:%Y-%m-%d %H:%M}")

        logger.info("Scheduler stopped")

    def stop(self) -> None:
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()
