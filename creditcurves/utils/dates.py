from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta
from pandas import Timestamp

DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"

DateLike = Union[str, date, datetime, Timestamp]


def to_date(date_like: DateLike) -> date:
    """
    Convert a string, Timestamp or datetime to a date.
    Accepts 'YYYY-MM-DD' and 'YYYYMMDD' string formats.
    """
    if isinstance(date_like, Timestamp):
        return date_like.date()
    # datetime is a subclass of date, so check it first
    if isinstance(date_like, datetime):
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(date_like, fmt).date()
            except ValueError:
                continue
        raise ValueError(f"Unsupported date string format: {date_like!r}")
    raise TypeError(f"Unsupported type for date: {type(date_like)}")


def is_date_like(value) -> bool:
    """True for values accepted by ``to_date`` (numbers are year fractions, not dates)."""
    return isinstance(value, (str, date, datetime, Timestamp))


def parse_tenor(tenor: str) -> relativedelta:
    """Convert a tenor string such as '3M', '1Y', '2W' or '10D' to a relativedelta."""
    t = tenor.upper().strip()
    if len(t) < 2 or not t[:-1].isdigit():
        raise ValueError(f"Unsupported tenor: {tenor}")
    amount = int(t[:-1])
    unit = t[-1]
    if unit == "D":
        return relativedelta(days=amount)
    if unit == "W":
        return relativedelta(weeks=amount)
    if unit == "M":
        return relativedelta(months=amount)
    if unit == "Y":
        return relativedelta(years=amount)
    raise ValueError(f"Unsupported tenor: {tenor}")


def add_tenor(start: DateLike, tenor: str) -> date:
    """Add an unadjusted tenor to a date."""
    return to_date(start) + parse_tenor(tenor)
