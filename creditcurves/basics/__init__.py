"""Reference data: currencies, legal-entity identifiers and FX rates."""

from .currency import CHF, EUR, GBP, JPY, USD, Currency, StandardId
from .fx import FxMatrix, FxRateProvider

__all__ = [
    "Currency",
    "StandardId",
    "FxMatrix",
    "FxRateProvider",
    "USD",
    "EUR",
    "GBP",
    "JPY",
    "CHF",
]
