"""Credit Curve Discounting and Sensitivity Library.

This package provides discount factor and zero rate views over credit
curves, point sensitivities to zero rates and recovery rates, and their
projection onto curve parameters.

Key modules:
- conventions: Day counts, year-fraction conversion and holiday calendars
- interpolation: Interpolators with node sensitivities
- curves: Discount factor, survival probability and recovery rate curves
- sensitivity: Point and parameter sensitivities, aggregation
- basics: Currencies, legal entities and FX rates
"""

__version__ = "1.0.0"

from .basics import Currency, FxMatrix, FxRateProvider, StandardId
from .config import CurveConfig, get_default_config, set_default_config
from .conventions import YearFractionConverter, get_day_count_convention
from .curves import (
    ConstantRecoveryRates,
    CreditDiscountFactors,
    DiscountFactorCreditDiscountFactors,
    FlatCreditDiscountFactors,
    InterpolatedRecoveryRates,
    LegalEntitySurvivalProbabilities,
    RecoveryRates,
    ZeroRateCreditDiscountFactors,
    create_flat_credit_curve,
)
from .errors import (
    CreditCurveError,
    IndexOutOfRange,
    InvalidDateOrder,
    MissingFxRate,
    ParameterCountMismatch,
    UnresolvedCurve,
)
from .sensitivity import (
    CurrencyParameterSensitivities,
    CurrencyParameterSensitivity,
    CurveKey,
    CurveRegistry,
    MutablePointSensitivities,
    PointSensitivities,
    RecoveryRateSensitivity,
    SensitivityAggregator,
    ZeroRateSensitivity,
    aggregate,
)

__all__ = [
    "__version__",
    "Currency",
    "StandardId",
    "FxMatrix",
    "FxRateProvider",
    "CurveConfig",
    "get_default_config",
    "set_default_config",
    "YearFractionConverter",
    "get_day_count_convention",
    "CreditDiscountFactors",
    "FlatCreditDiscountFactors",
    "ZeroRateCreditDiscountFactors",
    "DiscountFactorCreditDiscountFactors",
    "create_flat_credit_curve",
    "LegalEntitySurvivalProbabilities",
    "RecoveryRates",
    "ConstantRecoveryRates",
    "InterpolatedRecoveryRates",
    "ZeroRateSensitivity",
    "RecoveryRateSensitivity",
    "MutablePointSensitivities",
    "PointSensitivities",
    "CurrencyParameterSensitivity",
    "CurrencyParameterSensitivities",
    "CurveKey",
    "CurveRegistry",
    "SensitivityAggregator",
    "aggregate",
    "CreditCurveError",
    "InvalidDateOrder",
    "ParameterCountMismatch",
    "IndexOutOfRange",
    "MissingFxRate",
    "UnresolvedCurve",
]
