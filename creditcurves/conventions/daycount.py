"""
QuantLib-backed day count convention implementations.

Most conventions are antisymmetric: a start date after the end date gives a
negative year fraction. Conventions that only make sense for ordered dates
(ACT/360A and BUS/252) set ``allows_reversed = False`` and raise
`InvalidDateOrder` instead.
"""

from calendar import isleap
from datetime import date, datetime
from typing import Union

import QuantLib as ql

from creditcurves.conventions.calendars_quantlib import (
    HolidayCalendar,
    WEEKEND_ONLY,
    get_calendar,
)
from creditcurves.config import get_default_config
from creditcurves.errors import InvalidDateOrder
from creditcurves.utils.dates import to_date


def _to_ql_date(dt: Union[date, datetime]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    py_date = to_date(dt)
    return ql.Date(py_date.day, py_date.month, py_date.year)


class DayCountConvention:
    """Base class for QuantLib-backed day count conventions."""

    allows_reversed = True

    def __init__(self, name: str, ql_daycount: ql.DayCounter):
        self.name = name
        self._ql_daycount = ql_daycount

    def _check_order(self, start: date, end: date) -> None:
        if not self.allows_reversed and end < start:
            raise InvalidDateOrder(
                f"{self.name} requires start <= end, got start={start}, end={end}"
            )

    def year_fraction(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> float:
        """Calculate year fraction between two dates using QuantLib."""
        start_date = to_date(start)
        end_date = to_date(end)
        self._check_order(start_date, end_date)
        return self._ql_daycount.yearFraction(_to_ql_date(start_date), _to_ql_date(end_date))

    def day_count(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> int:
        """Calculate number of days between two dates."""
        start_date = to_date(start)
        end_date = to_date(end)
        self._check_order(start_date, end_date)
        return self._ql_daycount.dayCount(_to_ql_date(start_date), _to_ql_date(end_date))

    def __eq__(self, other) -> bool:
        return isinstance(other, DayCountConvention) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"DayCountConvention({self.name})"

    def __str__(self) -> str:
        return self.name


class Actual360(DayCountConvention):
    """ACT/360 day count convention."""

    def __init__(self):
        super().__init__("ACT/360", ql.Actual360())


class Actual365Fixed(DayCountConvention):
    """ACT/365F (ACT/365 Fixed) day count convention.

    Default time basis for credit curves (ISDA CDS standard model).
    """

    def __init__(self):
        super().__init__("ACT/365F", ql.Actual365Fixed())


class Actual360Adjusted(DayCountConvention):
    """ACT/360A: actual days less any Feb 29, over 360.

    Not available in QuantLib; computed directly. Reversed dates are rejected.
    """

    allows_reversed = False

    def __init__(self):
        super().__init__("ACT/360A", ql.Actual360())

    def year_fraction(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> float:
        """Day count without leap days, over 360."""
        return self.day_count(start, end) / 360.0

    def day_count(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> int:
        start_date = to_date(start)
        end_date = to_date(end)
        self._check_order(start_date, end_date)
        # leap days inside [start, end) are skipped
        leap_days = sum(
            1
            for year in range(start_date.year, end_date.year + 1)
            if isleap(year) and start_date <= date(year, 2, 29) < end_date
        )
        return (end_date - start_date).days - leap_days


class Thirty360European(DayCountConvention):
    """30E/360 (30/360 European) day count convention."""

    def __init__(self):
        super().__init__("30E/360", ql.Thirty360(ql.Thirty360.European))


class Thirty360US(DayCountConvention):
    """30U/360 (30/360 US - Bond Basis) day count convention."""

    def __init__(self):
        super().__init__("30U/360", ql.Thirty360(ql.Thirty360.BondBasis))


class ActualActualISDA(DayCountConvention):
    """ACT/ACT ISDA day count convention."""

    def __init__(self):
        super().__init__("ACT/ACT", ql.ActualActual(ql.ActualActual.ISDA))


class Business252(DayCountConvention):
    """BUS/252: business days in the holiday calendar divided by 252.

    Reversed dates are rejected.
    """

    allows_reversed = False

    def __init__(self, calendar: HolidayCalendar = WEEKEND_ONLY):
        super().__init__(f"BUS/252 {calendar.name}", ql.Business252(calendar.ql_calendar))
        self.calendar = calendar


# Pre-defined day count convention instances
ACT_360 = Actual360()
ACT_365F = Actual365Fixed()
THIRTY_360E = Thirty360European()
THIRTY_360U = Thirty360US()
ACT_ACT = ActualActualISDA()
ACT_360A = Actual360Adjusted()
BUS_252 = Business252()

# Registry
DAY_COUNT_CONVENTIONS = {
    "ACT/360": ACT_360,
    "ACTUAL/360": ACT_360,
    "ACT/360A": ACT_360A,
    "ACTUAL/360A": ACT_360A,
    "ACT/365F": ACT_365F,
    "ACT/365": ACT_365F,
    "ACTUAL/365F": ACT_365F,
    "30E/360": THIRTY_360E,
    "30/360E": THIRTY_360E,
    "30U/360": THIRTY_360U,
    "30/360": THIRTY_360U,
    "ACT/ACT": ACT_ACT,
    "ACTUAL/ACTUAL": ACT_ACT,
    "ACT/ACT ISDA": ACT_ACT,
}


def get_day_count_convention(name: Union[str, DayCountConvention]) -> DayCountConvention:
    """Get a day count convention by name.

    BUS/252 accepts a calendar suffix, e.g. ``"BUS/252 TARGET"``; without one
    the default calendar from `CurveConfig` is used.
    """
    if isinstance(name, DayCountConvention):
        return name
    name_upper = name.upper().strip()
    if name_upper in DAY_COUNT_CONVENTIONS:
        return DAY_COUNT_CONVENTIONS[name_upper]
    if name_upper == "BUS/252":
        return Business252(get_calendar(get_default_config().calendar))
    if name_upper.startswith("BUS/252 "):
        calendar_name = name_upper[len("BUS/252 "):].strip()
        return Business252(get_calendar(calendar_name))
    raise ValueError(
        f"Unknown day count convention: {name}. "
        f"Available: {list(DAY_COUNT_CONVENTIONS.keys())}"
    )
