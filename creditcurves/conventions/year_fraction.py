"""
Conversion of calendar dates to the year-fraction time coordinate of a curve.

A curve owns exactly one converter (valuation date + day count), so every
year fraction a curve reports or accepts is measured on that same basis.
"""

from typing import Union

from creditcurves.conventions.daycount import DayCountConvention, get_day_count_convention
from creditcurves.utils.dates import DateLike, to_date


class YearFractionConverter:
    """Maps (valuation date, query date) to a year fraction under one day count.

    Dates before the valuation date give a negative fraction for
    antisymmetric conventions (ACT/360, ACT/365F, 30/360, ACT/ACT); ACT/360A
    and BUS/252 raise `InvalidDateOrder` for them instead.
    """

    def __init__(self, day_count: Union[str, DayCountConvention] = "ACT/365F"):
        self.day_count = get_day_count_convention(day_count)

    def year_fraction(self, valuation_date: DateLike, query_date: DateLike) -> float:
        """Year fraction from ``valuation_date`` to ``query_date``."""
        return self.day_count.year_fraction(to_date(valuation_date), to_date(query_date))

    def __call__(self, valuation_date: DateLike, query_date: DateLike) -> float:
        return self.year_fraction(valuation_date, query_date)

    def __eq__(self, other) -> bool:
        return isinstance(other, YearFractionConverter) and other.day_count == self.day_count

    def __hash__(self) -> int:
        return hash(self.day_count)

    def __repr__(self) -> str:
        return f"YearFractionConverter({self.day_count.name})"
