"""
Interpolation methods for credit curves.

Each interpolator returns both the interpolated value and its sensitivity
to the node values, which is what curve parameter sensitivities are built on.
"""

# Base classes
from .base import Interpolator

# Factory and utilities
from .factory import (
    create_interpolator,
    discount_factor_to_zero_rate,
    zero_rate_to_discount_factor,
)

# Linear interpolation methods
from .linear import (
    LinearInterpolator,
    LogLinearInterpolator,
    ProductLinearInterpolator,
)

__all__ = [
    # Base classes
    'Interpolator',

    # Linear interpolation methods
    'LinearInterpolator',
    'LogLinearInterpolator',
    'ProductLinearInterpolator',

    # Factory and utilities
    'create_interpolator',
    'discount_factor_to_zero_rate',
    'zero_rate_to_discount_factor',
]
