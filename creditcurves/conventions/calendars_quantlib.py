"""
QuantLib-backed holiday calendars.

Calendars are consumed as pure function providers: business-day checks and
date shifting. The no-holidays calendar (every day is a business day) is
the common default for credit curve year fractions.
"""

from datetime import date, datetime
from typing import Union

import QuantLib as ql

from creditcurves.utils.dates import to_date


def _to_ql_date(dt: Union[date, datetime, str]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    py_date = to_date(dt)
    return ql.Date(py_date.day, py_date.month, py_date.year)


def _to_py_date(ql_date: ql.Date) -> date:
    """Convert QuantLib Date to Python date."""
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class HolidayCalendar:
    """Base calendar class for QuantLib-backed business day calculations."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    @property
    def ql_calendar(self) -> ql.Calendar:
        """Underlying QuantLib calendar (used by business-day day counts)."""
        return self._ql_calendar

    def is_business_day(self, dt: Union[date, datetime]) -> bool:
        """Check if date is a business day (not weekend or holiday)."""
        return self._ql_calendar.isBusinessDay(_to_ql_date(dt))

    def is_holiday(self, dt: Union[date, datetime]) -> bool:
        """Check if date is a holiday."""
        return self._ql_calendar.isHoliday(_to_ql_date(dt))

    def shift(self, dt: Union[date, datetime], amount: int) -> date:
        """Move the date by ``amount`` business days (negative moves backwards)."""
        ql_result = self._ql_calendar.advance(_to_ql_date(dt), int(amount), ql.Days)
        return _to_py_date(ql_result)

    def next(self, dt: Union[date, datetime]) -> date:
        """Next business day strictly after the date."""
        return self.shift(dt, 1)

    def previous(self, dt: Union[date, datetime]) -> date:
        """Previous business day strictly before the date."""
        return self.shift(dt, -1)

    def next_or_same(self, dt: Union[date, datetime]) -> date:
        """The date itself if a business day, otherwise the next one."""
        return _to_py_date(self._ql_calendar.adjust(_to_ql_date(dt), ql.Following))

    def previous_or_same(self, dt: Union[date, datetime]) -> date:
        """The date itself if a business day, otherwise the previous one."""
        return _to_py_date(self._ql_calendar.adjust(_to_ql_date(dt), ql.Preceding))

    def days_between(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> int:
        """Count business days from start (inclusive) to end (exclusive)."""
        ql_start = _to_ql_date(start)
        ql_end = _to_ql_date(end)
        if ql_end < ql_start:
            raise ValueError(f"End date {to_date(end)} is before start date {to_date(start)}")
        return self._ql_calendar.businessDaysBetween(ql_start, ql_end, True, False)

    def combined_with(self, other: "HolidayCalendar") -> "HolidayCalendar":
        """Calendar whose holidays are the union of both calendars' holidays."""
        if other is self or other.name == self.name:
            return self
        if isinstance(other, NoHolidaysCalendar):
            return self
        joint = ql.JointCalendar(self._ql_calendar, other._ql_calendar)
        return HolidayCalendar(f"{self.name}+{other.name}", joint)

    def __eq__(self, other) -> bool:
        return isinstance(other, HolidayCalendar) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return f"HolidayCalendar[{self.name}]"


class NoHolidaysCalendar(HolidayCalendar):
    """Calendar where every day, weekends included, is a business day."""

    def __init__(self):
        super().__init__("NO_HOLIDAYS", ql.NullCalendar())

    def is_business_day(self, dt: Union[date, datetime]) -> bool:
        return True

    def is_holiday(self, dt: Union[date, datetime]) -> bool:
        return False

    def combined_with(self, other: HolidayCalendar) -> HolidayCalendar:
        return other


class WeekendCalendar(HolidayCalendar):
    """Simple calendar that only considers weekends as non-business days."""

    def __init__(self):
        super().__init__("WEEKEND", ql.WeekendsOnly())


class TargetCalendar(HolidayCalendar):
    """TARGET calendar (EUR settlement) maintained by QuantLib."""

    def __init__(self):
        super().__init__("TARGET", ql.TARGET())


# Pre-defined calendar instances
NO_HOLIDAYS = NoHolidaysCalendar()
WEEKEND_ONLY = WeekendCalendar()
TARGET = TargetCalendar()

# Calendar registry
CALENDARS = {
    "NO_HOLIDAYS": NO_HOLIDAYS,
    "NOHOLIDAYS": NO_HOLIDAYS,
    "WEEKEND": WEEKEND_ONLY,
    "TARGET": TARGET,
    "EUR": TARGET,  # Alias
}


def get_calendar(name: str) -> HolidayCalendar:
    """Get a calendar by name."""
    key = name.upper()
    if key not in CALENDARS:
        raise ValueError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[key]
