"""
Sensitivity package - point sensitivities, parameter sensitivities, aggregation.

Main APIs:
---------
    - ZeroRateSensitivity, RecoveryRateSensitivity: point sensitivities
    - MutablePointSensitivities, PointSensitivities: collections of points
    - CurrencyParameterSensitivity(ies): sensitivities to curve parameters
    - SensitivityAggregator / aggregate: points to parameter sensitivities
"""

from .aggregator import (
    CurveKey,
    CurveLookup,
    CurveRegistry,
    SensitivityAggregator,
    aggregate,
)
from .collection import MutablePointSensitivities, PointSensitivities
from .parameter import CurrencyParameterSensitivities, CurrencyParameterSensitivity
from .point import (
    PointSensitivity,
    RecoveryRateSensitivity,
    SensitivityKind,
    ZeroRateSensitivity,
)

__all__ = [
    "SensitivityKind",
    "PointSensitivity",
    "ZeroRateSensitivity",
    "RecoveryRateSensitivity",
    "MutablePointSensitivities",
    "PointSensitivities",
    "CurrencyParameterSensitivity",
    "CurrencyParameterSensitivities",
    "CurveKey",
    "CurveLookup",
    "CurveRegistry",
    "SensitivityAggregator",
    "aggregate",
]
