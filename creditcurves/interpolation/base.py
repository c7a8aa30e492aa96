"""
Base classes for curve interpolation methods.

Besides the interpolated value, every interpolator reports the sensitivity
of that value to each node value. Curves use it to project point
sensitivities onto their parameters.
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np


class Interpolator(ABC):
    """Base class for curve interpolation methods."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        """
        Initialize interpolator.

        Args:
            pillars: Time to maturity points (in years)
            values: Values to interpolate (discount factors, zero rates, etc.)
        """
        if len(pillars) != len(values):
            raise ValueError("Pillars and values must have same length")
        if len(pillars) < 1:
            raise ValueError("Need at least 1 point for interpolation")

        self.pillars = np.asarray(pillars, dtype=float)
        self.values = np.asarray(values, dtype=float)

        # Node order is the parameter order of the curve, so it is never re-sorted
        if np.any(np.diff(self.pillars) <= 0):
            raise ValueError("Pillars must be strictly increasing without duplicates")

    @property
    def size(self) -> int:
        return len(self.pillars)

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolate value at time t."""
        pass

    @abstractmethod
    def parameter_sensitivity(self, t: float) -> np.ndarray:
        """Derivative of ``interpolate(t)`` with respect to each node value."""
        pass

    def with_values(self, values: Sequence[float]) -> "Interpolator":
        """Same pillars and method, new node values."""
        return type(self)(self.pillars.tolist(), list(values))

    def _segment(self, t: float) -> int:
        """Index i of the segment [pillars[i], pillars[i+1]] containing t."""
        i = int(np.searchsorted(self.pillars, t)) - 1
        return min(max(i, 0), self.size - 2)

    def _unit(self, index: int) -> np.ndarray:
        sens = np.zeros(self.size)
        sens[index] = 1.0
        return sens
