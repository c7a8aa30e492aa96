"""Tests for SensitivityAggregator and CurveRegistry."""

import logging

import numpy as np
import pytest

from creditcurves.basics import EUR, USD, StandardId
from creditcurves.curves import (
    ConstantRecoveryRates,
    FlatCreditDiscountFactors,
    LegalEntitySurvivalProbabilities,
    ZeroRateCreditDiscountFactors,
)
from creditcurves.errors import UnresolvedCurve
from creditcurves.sensitivity import (
    CurveKey,
    CurveRegistry,
    MutablePointSensitivities,
    PointSensitivities,
    RecoveryRateSensitivity,
    SensitivityAggregator,
    SensitivityKind,
    ZeroRateSensitivity,
    aggregate,
)


@pytest.fixture
def recovery(acme, valuation_date) -> ConstantRecoveryRates:
    return ConstantRecoveryRates(acme, "EUR", valuation_date, 0.4, name="ACME-REC")


@pytest.fixture
def registry(usd_curve, recovery) -> CurveRegistry:
    return CurveRegistry().with_discount_curve(usd_curve).with_recovery_rates(recovery)


def test_two_curve_aggregation(registry, acme) -> None:
    """USD discount and EUR recovery points give two results."""
    points = PointSensitivities.of(
        ZeroRateSensitivity.of(USD, 0.75, 10.0),
        RecoveryRateSensitivity.of(EUR, 1.0, acme, 4.0),
    )
    result = SensitivityAggregator(registry).aggregate(points)
    assert result.size() == 2
    np.testing.assert_allclose(result.get("USD-DSC", USD).sensitivity, [5.0, 5.0, 0.0])
    np.testing.assert_allclose(result.get("ACME-REC", EUR).sensitivity, [4.0])


def test_equal_keys_summed_before_projection(registry) -> None:
    """Split points give the same answer as their sum."""
    split = [ZeroRateSensitivity.of(USD, 0.75, 3.0), ZeroRateSensitivity.of(USD, 0.75, 7.0)]
    whole = [ZeroRateSensitivity.of(USD, 0.75, 10.0)]
    assert aggregate(split, registry).equal_with_tolerance(aggregate(whole, registry), 1e-12)


def test_points_on_same_curve_added(registry) -> None:
    """Different year fractions on one curve add element-wise."""
    points = MutablePointSensitivities([
        ZeroRateSensitivity.of(USD, 0.75, 10.0),
        ZeroRateSensitivity.of(USD, 2.0, 1.0),
        ZeroRateSensitivity.of(USD, 0.25, 2.0),
    ])
    result = aggregate(points, registry)
    assert result.size() == 1
    np.testing.assert_allclose(result.get("USD-DSC", USD).sensitivity, [7.0, 5.0, 1.0])


def test_unresolved_curve(registry) -> None:
    """A point with no owning curve raises UnresolvedCurve."""
    with pytest.raises(UnresolvedCurve, match="No curve found"):
        aggregate([ZeroRateSensitivity.of(EUR, 1.0, 1.0)], registry)
    with pytest.raises(LookupError):
        aggregate([RecoveryRateSensitivity.of(EUR, 1.0, StandardId("OG-Ticker", "OTHER"), 1.0)], registry)


def test_kinds_route_to_different_curves(acme, valuation_date, registry) -> None:
    """Zero-rate points with an entity go to the survival curve, recovery points to recovery rates."""
    hazard = ZeroRateCreditDiscountFactors("EUR", valuation_date, [1.0, 5.0], [0.01, 0.02], name="ACME-HAZ")
    survival = LegalEntitySurvivalProbabilities(acme, hazard)
    registry = registry.with_survival_curve(survival)
    points = [
        ZeroRateSensitivity.of(EUR, 1.0, 2.0, legal_entity_id=acme),
        RecoveryRateSensitivity.of(EUR, 1.0, acme, 2.0),
    ]
    result = aggregate(points, registry)
    assert result.size() == 2
    np.testing.assert_allclose(result.get("ACME-HAZ", EUR).sensitivity, [2.0, 0.0])
    np.testing.assert_allclose(result.get("ACME-REC", EUR).sensitivity, [2.0])


def test_callable_lookup(usd_curve) -> None:
    """A plain function can resolve curves."""
    def lookup(key: CurveKey):
        return usd_curve if key.curve_currency == USD else None

    result = SensitivityAggregator(lookup).aggregate([ZeroRateSensitivity.of(USD, 1.0, 1.0)])
    np.testing.assert_allclose(result.get("USD-DSC", USD).sensitivity, [0.0, 1.0, 0.0])


def test_invalid_lookup() -> None:
    """Lookup must be callable or provide find_curve."""
    with pytest.raises(TypeError, match="find_curve"):
        SensitivityAggregator(42)


def test_group_keeps_first_seen_order(acme) -> None:
    """Grouping sums equal keys and keeps first appearance order."""
    points = [
        ZeroRateSensitivity.of(USD, 2.0, 1.0),
        RecoveryRateSensitivity.of(EUR, 1.0, acme, 1.0),
        ZeroRateSensitivity.of(USD, 2.0, 2.0),
    ]
    groups = SensitivityAggregator.group(points)
    assert len(groups) == 2
    assert groups[0].kind is SensitivityKind.ZERO_RATE
    assert groups[0].sensitivity == 3.0
    assert groups[1].kind is SensitivityKind.RECOVERY_RATE


def test_empty_input(registry) -> None:
    """No points, no results."""
    assert aggregate([], registry).size() == 0


def test_registry_copy_on_write(usd_curve, recovery) -> None:
    """with_* leaves the original registry unchanged."""
    empty = CurveRegistry()
    filled = empty.with_discount_curve(usd_curve)
    assert len(empty) == 0
    assert len(filled) == 1
    assert filled.find_curve(CurveKey(SensitivityKind.ZERO_RATE, USD)) is usd_curve
    assert filled.find_curve(CurveKey(SensitivityKind.ZERO_RATE, EUR)) is None


def test_curve_key_from_point(acme) -> None:
    """Curve key drops year fraction, currency and value."""
    point = RecoveryRateSensitivity.of(EUR, 1.0, acme, 3.0, sensitivity_currency=USD)
    key = CurveKey.from_point(point)
    assert key == CurveKey(SensitivityKind.RECOVERY_RATE, EUR, acme)
    assert str(key) == "RecoveryRate(EUR, OG-Ticker~ACME)"


def test_aggregation_logged(registry, caplog) -> None:
    """Each group is traced at debug level."""
    with caplog.at_level(logging.DEBUG, logger="creditcurves.sensitivity.aggregator"):
        aggregate([ZeroRateSensitivity.of(USD, 0.75, 10.0)], registry)
    assert "USD-DSC" in caplog.text


def test_unnamed_curves_stay_separate(valuation_date) -> None:
    """A discount curve and two entities' survival curves, all unnamed, give three results."""
    acme = StandardId("OG-Ticker", "ACME")
    other = StandardId("OG-Ticker", "OTHER")
    registry = (
        CurveRegistry()
        .with_discount_curve(FlatCreditDiscountFactors("USD", valuation_date, 0.02))
        .with_survival_curve(
            LegalEntitySurvivalProbabilities(acme, FlatCreditDiscountFactors("USD", valuation_date, 0.01))
        )
        .with_survival_curve(
            LegalEntitySurvivalProbabilities(other, FlatCreditDiscountFactors("USD", valuation_date, 0.03))
        )
    )
    points = [
        ZeroRateSensitivity.of(USD, 1.0, 1.0),
        ZeroRateSensitivity.of(USD, 1.0, 2.0, legal_entity_id=acme),
        ZeroRateSensitivity.of(USD, 1.0, 4.0, legal_entity_id=other),
    ]
    result = aggregate(points, registry)
    assert result.size() == 3
    np.testing.assert_allclose(result.get("USD-FlatCreditDiscountFactors", USD).sensitivity, [1.0])
    np.testing.assert_allclose(result.get("OG-Ticker~ACME-USD-SURVIVAL", USD).sensitivity, [2.0])
    np.testing.assert_allclose(result.get("OG-Ticker~OTHER-USD-SURVIVAL", USD).sensitivity, [4.0])


def test_registry_rejects_duplicate_curve_name(acme, valuation_date, registry) -> None:
    """A second curve may not reuse a name held under another key; replacing the same key is fine."""
    clash = ZeroRateCreditDiscountFactors("EUR", valuation_date, [1.0], [0.01], name="USD-DSC")
    with pytest.raises(ValueError, match="already used"):
        registry.with_discount_curve(clash)
    with pytest.raises(ValueError, match="already used"):
        registry.with_survival_curve(LegalEntitySurvivalProbabilities(acme, clash))
    with pytest.raises(ValueError, match="already used"):
        registry.with_recovery_rates(
            ConstantRecoveryRates(StandardId("OG-Ticker", "OTHER"), "EUR", valuation_date, 0.4, name="ACME-REC")
        )
    replacement = ZeroRateCreditDiscountFactors("USD", valuation_date, [1.0], [0.01], name="USD-DSC")
    replaced = registry.with_discount_curve(replacement)
    assert replaced.find_curve(CurveKey(SensitivityKind.ZERO_RATE, USD)) is replacement
    assert len(replaced.curves()) == 2
