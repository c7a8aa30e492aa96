"""
Factory functions and utilities for creating interpolators.
"""
import math
from typing import Sequence

from .base import Interpolator
from .linear import LinearInterpolator, LogLinearInterpolator, ProductLinearInterpolator

INTERPOLATORS = {
    "LINEAR": LinearInterpolator,
    "LINEAR_ZERO": LinearInterpolator,
    "PRODUCT_LINEAR": ProductLinearInterpolator,
    "ISDA": ProductLinearInterpolator,
    "LOG_LINEAR": LogLinearInterpolator,
    "LOGLINEAR_DF": LogLinearInterpolator,
}


def create_interpolator(method: str,
                        pillars: Sequence[float],
                        values: Sequence[float]) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: Interpolation method name
        pillars: Time points
        values: Values to interpolate

    Returns:
        Configured interpolator
    """
    method_upper = method.upper()
    if method_upper not in INTERPOLATORS:
        raise ValueError(f"Unknown interpolation method: {method}. "
                         f"Available: {', '.join(INTERPOLATORS)}")
    return INTERPOLATORS[method_upper](pillars, values)


# Helper functions
def discount_factor_to_zero_rate(df: float, time: float) -> float:
    """Convert discount factor to continuously compounded zero rate."""
    if df <= 0:
        raise ValueError("Discount factor must be positive")
    if time <= 0:
        raise ValueError("Time must be positive")

    return -math.log(df) / time


def zero_rate_to_discount_factor(rate: float, time: float) -> float:
    """Convert zero rate to discount factor."""
    return math.exp(-rate * time)
