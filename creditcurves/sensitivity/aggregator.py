"""
Aggregation of point sensitivities into curve parameter sensitivities.

Points sharing an aggregation key are summed first, then each sum is
resolved to the curve that owns it and projected onto that curve's
parameters. Results for the same curve and currency are added
element-wise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Protocol,
    Tuple,
    Union,
)

from creditcurves.basics.currency import Currency, StandardId
from creditcurves.errors import UnresolvedCurve
from creditcurves.sensitivity.parameter import CurrencyParameterSensitivities
from creditcurves.sensitivity.point import PointSensitivity, SensitivityKind

if TYPE_CHECKING:
    from creditcurves.curves.base import CreditDiscountFactors
    from creditcurves.curves.recovery import RecoveryRates
    from creditcurves.curves.survival import LegalEntitySurvivalProbabilities

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveKey:
    """Identifies the curve a point sensitivity belongs to."""

    kind: SensitivityKind
    curve_currency: Currency
    legal_entity_id: Optional[StandardId] = None

    @classmethod
    def from_point(cls, point: PointSensitivity) -> "CurveKey":
        return cls(point.kind, point.curve_currency, point.legal_entity_id)

    def __str__(self) -> str:
        entity = f", {self.legal_entity_id}" if self.legal_entity_id is not None else ""
        return f"{self.kind.value}({self.curve_currency}{entity})"


class CurveLookup(Protocol):
    """Anything able to resolve a `CurveKey` to a curve, or None."""

    def find_curve(self, key: CurveKey):
        ...


class CurveRegistry:
    """
    In-memory curve lookup.

    Zero-rate keys without a legal entity resolve to discount curves by
    currency; zero-rate keys with a legal entity resolve to survival curves
    and recovery-rate keys to recovery rates, both by (entity, currency).
    The ``with_*`` methods return a new registry.
    """

    def __init__(
        self,
        discount_curves: Optional[Dict[Currency, "CreditDiscountFactors"]] = None,
        survival_curves: Optional[Dict[Tuple[StandardId, Currency], "LegalEntitySurvivalProbabilities"]] = None,
        recovery_rates: Optional[Dict[Tuple[StandardId, Currency], "RecoveryRates"]] = None,
    ):
        self._discount_curves = dict(discount_curves or {})
        self._survival_curves = dict(survival_curves or {})
        self._recovery_rates = dict(recovery_rates or {})

    def with_discount_curve(self, curve: "CreditDiscountFactors") -> "CurveRegistry":
        self._check_name_free(curve, self._discount_curves.get(curve.currency))
        discount_curves = dict(self._discount_curves)
        discount_curves[curve.currency] = curve
        return CurveRegistry(discount_curves, self._survival_curves, self._recovery_rates)

    def with_survival_curve(self, curve: "LegalEntitySurvivalProbabilities") -> "CurveRegistry":
        key = (curve.legal_entity_id, curve.currency)
        self._check_name_free(curve, self._survival_curves.get(key))
        survival_curves = dict(self._survival_curves)
        survival_curves[key] = curve
        return CurveRegistry(self._discount_curves, survival_curves, self._recovery_rates)

    def with_recovery_rates(self, curve: "RecoveryRates") -> "CurveRegistry":
        key = (curve.legal_entity_id, curve.currency)
        self._check_name_free(curve, self._recovery_rates.get(key))
        recovery_rates = dict(self._recovery_rates)
        recovery_rates[key] = curve
        return CurveRegistry(self._discount_curves, self._survival_curves, recovery_rates)

    def curves(self) -> List[object]:
        """Every curve held, discount curves first."""
        return [
            *self._discount_curves.values(),
            *self._survival_curves.values(),
            *self._recovery_rates.values(),
        ]

    def _check_name_free(self, curve, replaced) -> None:
        # parameter sensitivities are keyed by curve name
        for held in self.curves():
            if held is not replaced and held.curve_name == curve.curve_name:
                raise ValueError(
                    f"Curve name '{curve.curve_name}' is already used by another {type(held).__name__}"
                )

    def find_curve(self, key: CurveKey):
        if key.kind is SensitivityKind.RECOVERY_RATE:
            return self._recovery_rates.get((key.legal_entity_id, key.curve_currency))
        if key.legal_entity_id is None:
            return self._discount_curves.get(key.curve_currency)
        return self._survival_curves.get((key.legal_entity_id, key.curve_currency))

    def __len__(self) -> int:
        return len(self._discount_curves) + len(self._survival_curves) + len(self._recovery_rates)

    def __repr__(self) -> str:
        return (f"CurveRegistry(discount={list(self._discount_curves)}, "
                f"survival={list(self._survival_curves)}, "
                f"recovery={list(self._recovery_rates)})")


LookupLike = Union[CurveLookup, Callable[[CurveKey], object]]


class SensitivityAggregator:
    """Turns a set of point sensitivities into parameter sensitivities."""

    def __init__(self, curve_lookup: LookupLike):
        if hasattr(curve_lookup, "find_curve"):
            self._find_curve = curve_lookup.find_curve
        elif callable(curve_lookup):
            self._find_curve = curve_lookup
        else:
            raise TypeError(
                f"curve_lookup must provide find_curve(key) or be callable, got {type(curve_lookup).__name__}"
            )

    @staticmethod
    def group(points: Iterable[PointSensitivity]) -> List[PointSensitivity]:
        """Sum points sharing a key; groups keep the order of first appearance."""
        groups: Dict[tuple, PointSensitivity] = {}
        for point in points:
            point = point.normalize()
            key = point.key()
            existing = groups.get(key)
            if existing is None:
                groups[key] = point
            else:
                groups[key] = existing.with_sensitivity(existing.sensitivity + point.sensitivity)
        return list(groups.values())

    def aggregate(self, points: Iterable[PointSensitivity]) -> CurrencyParameterSensitivities:
        """
        Project every point sensitivity onto the parameters of its curve.

        Args:
            points: Any iterable of point sensitivities, including
                `PointSensitivities` and `MutablePointSensitivities`

        Returns:
            One entry per (curve name, currency)

        Raises:
            UnresolvedCurve: if no curve is found for a point's key
        """
        result = CurrencyParameterSensitivities.empty()
        for point in self.group(points):
            curve_key = CurveKey.from_point(point)
            curve = self._find_curve(curve_key)
            if curve is None:
                raise UnresolvedCurve(f"No curve found for {curve_key} (point at t={point.year_fraction})")
            logger.debug(
                "Aggregating %s at t=%s -> %s", point.sensitivity, point.year_fraction, curve.curve_name
            )
            result = result.combined_with(curve.parameter_sensitivity(point))
        return result


def aggregate(points: Iterable[PointSensitivity], curve_lookup: LookupLike) -> CurrencyParameterSensitivities:
    """Shortcut for ``SensitivityAggregator(curve_lookup).aggregate(points)``."""
    return SensitivityAggregator(curve_lookup).aggregate(points)
