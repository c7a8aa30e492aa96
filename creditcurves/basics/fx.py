"""
FX rate providers used to re-express sensitivities in another currency.

`FxMatrix` is a small in-memory snapshot of spot rates keyed by pair string
(e.g. "EURUSD" = USD per 1 EUR). It serves the quoted direction, the
inverse, and the identity rate; anything else raises `MissingFxRate`.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Protocol, Union, runtime_checkable

from creditcurves.basics.currency import Currency
from creditcurves.errors import MissingFxRate

logger = logging.getLogger(__name__)

CurrencyLike = Union[str, Currency]


@runtime_checkable
class FxRateProvider(Protocol):
    """Anything able to return the rate converting base-currency amounts to counter."""

    def fx_rate(self, base: Currency, counter: Currency) -> float:
        """Return the number of ``counter`` units per one ``base`` unit."""
        ...


def _pair_key(base: CurrencyLike, counter: CurrencyLike) -> str:
    return f"{Currency.of(base).code}{Currency.of(counter).code}"


class FxMatrix:
    """
    FX spot snapshot: pair string -> rate.
    Immutable-style: ``with_rate`` returns a new instance.
    """

    def __init__(self, rates: Optional[Mapping[str, float]] = None) -> None:
        self._rates: Dict[str, float] = {}
        for pair, rate in (rates or {}).items():
            key = pair.replace("/", "").upper()
            if len(key) != 6:
                raise ValueError(f"FX pair must be six letters, e.g. 'EURUSD': {pair!r}")
            if rate <= 0:
                raise ValueError(f"FX rate for {pair} must be positive: {rate}")
            self._rates[key] = float(rate)

    @classmethod
    def of(cls, base: CurrencyLike, counter: CurrencyLike, rate: float) -> "FxMatrix":
        return cls({_pair_key(base, counter): rate})

    def fx_rate(self, base: CurrencyLike, counter: CurrencyLike) -> float:
        """Rate converting ``base`` amounts to ``counter``; 1.0 when the currencies match."""
        base_ccy = Currency.of(base)
        counter_ccy = Currency.of(counter)
        if base_ccy == counter_ccy:
            return 1.0
        direct = self._rates.get(_pair_key(base_ccy, counter_ccy))
        if direct is not None:
            return direct
        inverse = self._rates.get(_pair_key(counter_ccy, base_ccy))
        if inverse is not None:
            return 1.0 / inverse
        logger.debug("No FX rate for %s/%s in %s", base_ccy, counter_ccy, sorted(self._rates))
        raise MissingFxRate(f"No FX rate available for {base_ccy}/{counter_ccy}")

    def with_rate(self, base: CurrencyLike, counter: CurrencyLike, rate: float) -> "FxMatrix":
        """Return a new matrix with the given pair updated/added."""
        new_rates = dict(self._rates)
        new_rates[_pair_key(base, counter)] = rate
        return FxMatrix(new_rates)

    @property
    def pairs(self) -> Dict[str, float]:
        return dict(self._rates)

    def __repr__(self) -> str:
        return f"FxMatrix({self._rates})"
