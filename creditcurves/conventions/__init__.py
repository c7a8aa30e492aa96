"""
Market conventions: day counts, year-fraction conversion and holiday calendars.
"""

from .calendars_quantlib import (
    NO_HOLIDAYS,
    TARGET,
    WEEKEND_ONLY,
    HolidayCalendar,
    NoHolidaysCalendar,
    get_calendar,
)
from .daycount import (
    ACT_360,
    ACT_365F,
    ACT_ACT,
    DayCountConvention,
    get_day_count_convention,
)
from .year_fraction import YearFractionConverter

__all__ = [
    "HolidayCalendar",
    "NoHolidaysCalendar",
    "NO_HOLIDAYS",
    "TARGET",
    "WEEKEND_ONLY",
    "get_calendar",
    "DayCountConvention",
    "ACT_360",
    "ACT_365F",
    "ACT_ACT",
    "get_day_count_convention",
    "YearFractionConverter",
]
