"""
Linear interpolation methods for credit curves.
"""
import math
from typing import Sequence

import numpy as np

from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Linear interpolation on node values with flat extrapolation.

    Used on zero rates: the value at t depends on the two bracketing
    nodes only, with weights (1 - w, w).
    """

    def interpolate(self, t: float) -> float:
        """Linear interpolation on values."""
        # Extrapolation
        if t <= self.pillars[0]:
            return float(self.values[0])
        if t >= self.pillars[-1]:
            return float(self.values[-1])

        i = self._segment(t)
        t1, t2 = self.pillars[i], self.pillars[i + 1]
        v1, v2 = self.values[i], self.values[i + 1]

        weight = (t - t1) / (t2 - t1)
        return float(v1 + weight * (v2 - v1))

    def parameter_sensitivity(self, t: float) -> np.ndarray:
        if t <= self.pillars[0]:
            return self._unit(0)
        if t >= self.pillars[-1]:
            return self._unit(self.size - 1)

        i = self._segment(t)
        weight = (t - self.pillars[i]) / (self.pillars[i + 1] - self.pillars[i])
        sens = np.zeros(self.size)
        sens[i] = 1.0 - weight
        sens[i + 1] = weight
        return sens


class ProductLinearInterpolator(Interpolator):
    """Linear interpolation on t * value (ISDA standard model for zero rates).

    Equivalent to piecewise-flat forward rates between nodes. Flat value to
    the left of the first node; the last segment is extended to the right,
    which keeps the forward rate flat beyond the last node.
    """

    def _weights(self, t: float):
        i = self._segment(t)
        t1, t2 = self.pillars[i], self.pillars[i + 1]
        weight = (t - t1) / (t2 - t1)
        return i, (1.0 - weight) * t1 / t, weight * t2 / t

    def interpolate(self, t: float) -> float:
        if t <= self.pillars[0] or self.size == 1:
            return float(self.values[0])
        i, w1, w2 = self._weights(t)
        return float(w1 * self.values[i] + w2 * self.values[i + 1])

    def parameter_sensitivity(self, t: float) -> np.ndarray:
        if t <= self.pillars[0] or self.size == 1:
            return self._unit(0)
        i, w1, w2 = self._weights(t)
        sens = np.zeros(self.size)
        sens[i] = w1
        sens[i + 1] = w2
        return sens


class LogLinearInterpolator(Interpolator):
    """Log-linear interpolation on positive node values (discount factors).

    Equivalent to linear interpolation on log discount factors. Outside the
    node range the zero rate of the nearest node is held flat, i.e.
    ln DF(t) = (t / t_node) * ln DF_node.
    """

    def __init__(self, pillars: Sequence[float], discount_factors: Sequence[float]):
        super().__init__(pillars, discount_factors)
        if np.any(self.values <= 0):
            raise ValueError("Log-linear interpolation requires positive values")
        if self.pillars[0] <= 0:
            raise ValueError("Log-linear interpolation requires positive pillars")
        self.log_values = np.log(self.values)

    def _log_weights(self, t: float):
        """(index, weight) pairs such that ln y(t) = sum(weight * ln y_index)."""
        if t <= self.pillars[0]:
            return [(0, t / self.pillars[0])]
        if t >= self.pillars[-1]:
            last = self.size - 1
            return [(last, t / self.pillars[last])]
        i = self._segment(t)
        weight = (t - self.pillars[i]) / (self.pillars[i + 1] - self.pillars[i])
        return [(i, 1.0 - weight), (i + 1, weight)]

    def log_interpolate(self, t: float) -> float:
        """ln y(t), computed from the log node values without a round trip through exp."""
        return float(sum(w * self.log_values[j] for j, w in self._log_weights(t)))

    def interpolate(self, t: float) -> float:
        return math.exp(self.log_interpolate(t))

    def parameter_sensitivity(self, t: float) -> np.ndarray:
        value = self.interpolate(t)
        sens = np.zeros(self.size)
        for j, w in self._log_weights(t):
            sens[j] += value * w / self.values[j]
        return sens
