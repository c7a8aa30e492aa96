"""Date helpers shared across the package."""

from .dates import add_tenor, is_date_like, parse_tenor, to_date

__all__ = [
    "add_tenor",
    "is_date_like",
    "parse_tenor",
    "to_date",
]
