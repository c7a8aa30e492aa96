"""
Curves package - discount factor, survival and recovery rate views.

Main APIs:
---------
    - CreditDiscountFactors: discount factor / zero rate interface
    - ZeroRateCreditDiscountFactors, DiscountFactorCreditDiscountFactors,
      FlatCreditDiscountFactors: implementations per parameterization
    - LegalEntitySurvivalProbabilities: credit curve of one legal entity
    - RecoveryRates: recovery rate views
"""

from .base import CreditDiscountFactors, ParameterizedCurve
from .discount import (
    DiscountFactorCreditDiscountFactors,
    FlatCreditDiscountFactors,
    ZeroRateCreditDiscountFactors,
    create_flat_credit_curve,
)
from .recovery import ConstantRecoveryRates, InterpolatedRecoveryRates, RecoveryRates
from .survival import LegalEntitySurvivalProbabilities

__all__ = [
    "ParameterizedCurve",
    "CreditDiscountFactors",
    "FlatCreditDiscountFactors",
    "ZeroRateCreditDiscountFactors",
    "DiscountFactorCreditDiscountFactors",
    "create_flat_credit_curve",
    "LegalEntitySurvivalProbabilities",
    "RecoveryRates",
    "ConstantRecoveryRates",
    "InterpolatedRecoveryRates",
]
