"""
Holiday calendar backed by the holidays package.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional, Union

import holidays


logger = logging.getLogger(__name__)


class HolidayCalendar:
    """Public holidays for one country plus any extra market closure dates."""

    EXTRA_CLOSURE_NAME = "Market closure"

    def __init__(
        self,
        country: str = "KR",
        subdivision: Optional[str] = None,
        extra_dates: Optional[Iterable[date]] = None,
    ):
        """
        Initialize the calendar.

        Args:
            country: ISO country code understood by the holidays package
            subdivision: Optional state/province code
            extra_dates: Additional closure dates, e.g. an exchange's year-end closing
        """
        self.country = country
        self._holidays = holidays.country_holidays(country, subdiv=subdivision)
        for extra in extra_dates or []:
            self._holidays[extra] = self.EXTRA_CLOSURE_NAME

        logger.debug(f"Holiday calendar initialized for {country}")

    def is_holiday(self, when: Union[date, datetime]) -> bool:
        return self._to_date(when) in self._holidays

    def holiday_name(self, when: Union[date, datetime]) -> Optional[str]:
        return self._holidays.get(self._to_date(when))

    def __call__(self, when: Union[date, datetime]) -> bool:
        return self.is_holiday(when)

    @staticmethod
    def _to_date(when: Union[date, datetime]) -> date:
        if isinstance(when, datetime):
            return when.date()
        return when
