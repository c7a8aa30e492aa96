"""Tests for interpolators and their node sensitivities."""

import math

import numpy as np
import pytest

from creditcurves.interpolation import (
    LinearInterpolator,
    LogLinearInterpolator,
    ProductLinearInterpolator,
    create_interpolator,
    discount_factor_to_zero_rate,
    zero_rate_to_discount_factor,
)


def test_linear_midpoint_and_weights() -> None:
    """Linear: value and weights between two nodes."""
    interp = LinearInterpolator([0.5, 1.0, 2.0], [0.02, 0.04, 0.05])
    assert interp.interpolate(0.75) == pytest.approx(0.03)
    np.testing.assert_allclose(interp.parameter_sensitivity(0.75), [0.5, 0.5, 0.0])


def test_linear_flat_extrapolation() -> None:
    """Linear: flat outside the node range, full weight on the end node."""
    interp = LinearInterpolator([0.5, 1.0, 2.0], [0.02, 0.04, 0.05])
    assert interp.interpolate(0.1) == 0.02
    assert interp.interpolate(7.0) == 0.05
    np.testing.assert_allclose(interp.parameter_sensitivity(0.1), [1.0, 0.0, 0.0])
    np.testing.assert_allclose(interp.parameter_sensitivity(7.0), [0.0, 0.0, 1.0])


def test_product_linear_interior() -> None:
    """Product-linear: r*t is linear between nodes."""
    interp = ProductLinearInterpolator([1.0, 2.0], [0.02, 0.03])
    assert interp.interpolate(1.5) * 1.5 == pytest.approx(0.04)
    np.testing.assert_allclose(interp.parameter_sensitivity(1.5), [1.0 / 3.0, 2.0 / 3.0])


def test_product_linear_flat_forward_right() -> None:
    """Product-linear: forward rate stays flat past the last node."""
    interp = ProductLinearInterpolator([1.0, 2.0], [0.02, 0.03])
    assert interp.interpolate(3.0) * 3.0 == pytest.approx(0.10)


def test_product_linear_flat_left() -> None:
    """Product-linear: flat zero rate before the first node."""
    interp = ProductLinearInterpolator([1.0, 2.0], [0.02, 0.03])
    assert interp.interpolate(0.25) == 0.02
    np.testing.assert_allclose(interp.parameter_sensitivity(0.25), [1.0, 0.0])


def test_log_linear_interpolates_log_discount_factors() -> None:
    """Log-linear: ln DF linear between nodes."""
    interp = LogLinearInterpolator([1.0, 2.0], [math.exp(-0.02), math.exp(-0.06)])
    assert interp.interpolate(1.5) == pytest.approx(math.exp(-0.04))
    assert interp.log_interpolate(1.5) == pytest.approx(-0.04)
    assert interp.log_interpolate(0.5) == pytest.approx(-0.01)


def test_log_linear_sensitivity_matches_finite_difference() -> None:
    """Log-linear node sensitivity agrees with central differences."""
    values = [0.99, 0.97, 0.93]
    interp = LogLinearInterpolator([0.5, 1.0, 2.0], values)
    eps = 1e-6
    for t in (0.25, 0.75, 1.5, 4.0):
        analytic = interp.parameter_sensitivity(t)
        for j in range(3):
            up = list(values)
            down = list(values)
            up[j] += eps
            down[j] -= eps
            fd = (interp.with_values(up).interpolate(t) - interp.with_values(down).interpolate(t)) / (2 * eps)
            assert analytic[j] == pytest.approx(fd, abs=1e-8)


def test_log_linear_requires_positive_values() -> None:
    """Log-linear rejects non-positive values and pillars."""
    with pytest.raises(ValueError, match="positive values"):
        LogLinearInterpolator([1.0, 2.0], [0.99, 0.0])
    with pytest.raises(ValueError, match="positive pillars"):
        LogLinearInterpolator([0.0, 2.0], [1.0, 0.9])


def test_pillars_strictly_increasing() -> None:
    """Unsorted or duplicate pillars are rejected."""
    with pytest.raises(ValueError, match="strictly increasing"):
        LinearInterpolator([1.0, 1.0], [0.01, 0.02])
    with pytest.raises(ValueError, match="strictly increasing"):
        LinearInterpolator([2.0, 1.0], [0.01, 0.02])
    with pytest.raises(ValueError, match="same length"):
        LinearInterpolator([1.0, 2.0], [0.01])


def test_create_interpolator() -> None:
    """Factory resolves names case-insensitively."""
    assert isinstance(create_interpolator("isda", [1.0, 2.0], [0.01, 0.02]), ProductLinearInterpolator)
    assert isinstance(create_interpolator("LINEAR", [1.0], [0.01]), LinearInterpolator)
    with pytest.raises(ValueError, match="Unknown interpolation method"):
        create_interpolator("CUBIC", [1.0, 2.0], [0.01, 0.02])


def test_rate_conversions() -> None:
    """Zero rate and discount factor helpers are inverse."""
    df = zero_rate_to_discount_factor(0.03, 2.0)
    assert df == pytest.approx(math.exp(-0.06))
    assert discount_factor_to_zero_rate(df, 2.0) == pytest.approx(0.03)
    with pytest.raises(ValueError):
        discount_factor_to_zero_rate(df, 0.0)
