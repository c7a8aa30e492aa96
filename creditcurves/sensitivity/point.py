"""
Point sensitivities: the derivative of a priced quantity with respect to one
market observation (a zero rate or a recovery rate at a year fraction).

The family is closed. Each variant is a frozen dataclass carrying a
``kind`` discriminant that leads its aggregation key, so a zero-rate and a
recovery-rate sensitivity never merge, sort together or compare equal,
even when every other field matches.
"""

from __future__ import annotations

import math
from abc import ABC
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, ClassVar, Optional, Tuple, Union

from creditcurves.basics.currency import Currency, StandardId
from creditcurves.basics.fx import FxRateProvider
from creditcurves.sensitivity.collection import MutablePointSensitivities, PointSensitivities

CurrencyLike = Union[str, Currency]
EntityLike = Union[str, StandardId]

SensitivityKey = Tuple[str, str, str, Tuple[str, str], float]


class SensitivityKind(Enum):
    """Discriminant of the point sensitivity variants."""

    ZERO_RATE = "ZeroRate"
    RECOVERY_RATE = "RecoveryRate"


def _entity_key(legal_entity_id: Optional[StandardId]) -> Tuple[str, str]:
    # absent legal entity sorts before any present one
    if legal_entity_id is None:
        return ("", "")
    return (legal_entity_id.scheme, legal_entity_id.value)


class PointSensitivity(ABC):
    """Operations shared by every point sensitivity variant.

    Subclasses are frozen dataclasses with the fields ``curve_currency``,
    ``year_fraction``, ``currency``, ``legal_entity_id`` and ``sensitivity``.
    All transforms return new instances.
    """

    kind: ClassVar[SensitivityKind]

    curve_currency: Currency
    year_fraction: float
    currency: Currency
    legal_entity_id: Optional[StandardId]
    sensitivity: float

    def _validate(self) -> None:
        object.__setattr__(self, "curve_currency", Currency.of(self.curve_currency))
        object.__setattr__(self, "currency", Currency.of(self.currency))
        if self.legal_entity_id is not None:
            object.__setattr__(self, "legal_entity_id", StandardId.parse(self.legal_entity_id))
        year_fraction = float(self.year_fraction)
        if math.isnan(year_fraction) or year_fraction < 0:
            raise ValueError(f"year_fraction must be non-negative: {self.year_fraction}")
        object.__setattr__(self, "year_fraction", year_fraction)
        object.__setattr__(self, "sensitivity", float(self.sensitivity))

    # -- identity ---------------------------------------------------------

    def key(self) -> SensitivityKey:
        """Aggregation key; the sensitivity value is not part of it."""
        return (
            self.kind.value,
            self.curve_currency.code,
            self.currency.code,
            _entity_key(self.legal_entity_id),
            self.year_fraction,
        )

    def compare_key(self, other: "PointSensitivity") -> int:
        """Total order over identifying fields: negative, zero or positive."""
        mine, theirs = self.key(), other.key()
        if mine < theirs:
            return -1
        if mine > theirs:
            return 1
        return 0

    # -- transforms -------------------------------------------------------

    def with_currency(self, currency: CurrencyLike):
        """Re-tag the sensitivity currency without rescaling the value."""
        return replace(self, currency=Currency.of(currency))

    def with_sensitivity(self, sensitivity: float):
        return replace(self, sensitivity=sensitivity)

    def map_sensitivity(self, operator: Callable[[float], float]):
        """Apply ``operator`` to the value, e.g. negation or unit scaling."""
        return replace(self, sensitivity=operator(self.sensitivity))

    def multiplied_by(self, factor: float):
        return self.map_sensitivity(lambda value: value * factor)

    def converted_to(self, result_currency: CurrencyLike, rate_provider: FxRateProvider):
        """Express the value in ``result_currency`` using the provider's FX rate.

        Raises:
            MissingFxRate: if the provider has no rate for the pair
        """
        target = Currency.of(result_currency)
        if target == self.currency:
            return self
        fx_rate = rate_provider.fx_rate(self.currency, target)
        return replace(self, currency=target, sensitivity=fx_rate * self.sensitivity)

    def normalize(self):
        """Canonical form: plain floats and no negative zero in the year fraction."""
        return replace(
            self,
            year_fraction=self.year_fraction + 0.0,
            sensitivity=float(self.sensitivity),
        )

    def cloned(self):
        # immutable, so a snapshot is the instance itself
        return self

    # -- building ---------------------------------------------------------

    def build_into(self, combination: MutablePointSensitivities) -> MutablePointSensitivities:
        """Append this sensitivity to a running accumulator."""
        return combination.add(self)

    def build(self) -> PointSensitivities:
        return PointSensitivities.of(self)

    def combined_with(self, other) -> MutablePointSensitivities:
        """Start an accumulator holding this sensitivity and ``other``."""
        combination = MutablePointSensitivities()
        self.build_into(combination)
        return other.build_into(combination)


@dataclass(frozen=True)
class ZeroRateSensitivity(PointSensitivity):
    """
    Sensitivity to the continuously compounded zero rate at a year fraction.

    ``legal_entity_id`` is None for a risk-free discount curve and set for a
    legal-entity credit (survival) curve.
    """

    kind: ClassVar[SensitivityKind] = SensitivityKind.ZERO_RATE

    curve_currency: Currency
    year_fraction: float
    currency: Currency
    sensitivity: float
    legal_entity_id: Optional[StandardId] = None

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def of(
        cls,
        curve_currency: CurrencyLike,
        year_fraction: float,
        sensitivity: float,
        sensitivity_currency: Optional[CurrencyLike] = None,
        legal_entity_id: Optional[EntityLike] = None,
    ) -> "ZeroRateSensitivity":
        """Sensitivity expressed in the curve currency unless told otherwise."""
        currency = sensitivity_currency if sensitivity_currency is not None else curve_currency
        return cls(curve_currency, year_fraction, currency, sensitivity, legal_entity_id)

    def with_legal_entity_id(self, legal_entity_id: Optional[EntityLike]) -> "ZeroRateSensitivity":
        return replace(self, legal_entity_id=legal_entity_id)


@dataclass(frozen=True)
class RecoveryRateSensitivity(PointSensitivity):
    """Sensitivity to the recovery rate of a legal entity at a year fraction."""

    kind: ClassVar[SensitivityKind] = SensitivityKind.RECOVERY_RATE

    curve_currency: Currency
    year_fraction: float
    currency: Currency
    legal_entity_id: StandardId
    sensitivity: float

    def __post_init__(self) -> None:
        if self.legal_entity_id is None:
            raise ValueError("RecoveryRateSensitivity requires a legal_entity_id")
        self._validate()

    @classmethod
    def of(
        cls,
        curve_currency: CurrencyLike,
        year_fraction: float,
        legal_entity_id: EntityLike,
        sensitivity: float,
        sensitivity_currency: Optional[CurrencyLike] = None,
    ) -> "RecoveryRateSensitivity":
        currency = sensitivity_currency if sensitivity_currency is not None else curve_currency
        return cls(curve_currency, year_fraction, currency, legal_entity_id, sensitivity)

    @classmethod
    def of_zero_rate(
        cls, zero_rate_sensitivity: ZeroRateSensitivity, legal_entity_id: EntityLike
    ) -> "RecoveryRateSensitivity":
        """Same point and value as a zero-rate sensitivity, re-keyed to a recovery curve."""
        return cls(
            zero_rate_sensitivity.curve_currency,
            zero_rate_sensitivity.year_fraction,
            zero_rate_sensitivity.currency,
            legal_entity_id,
            zero_rate_sensitivity.sensitivity,
        )
