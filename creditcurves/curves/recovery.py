"""
Recovery rates of a legal entity.

A recovery rate curve is parameterized like any other curve, but its point
sensitivities are `RecoveryRateSensitivity` values and it never accepts
zero-rate sensitivities.
"""
import logging
from abc import abstractmethod
from datetime import date, datetime
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from creditcurves.basics.currency import Currency, StandardId
from creditcurves.basics.fx import FxRateProvider
from creditcurves.conventions.daycount import DayCountConvention
from creditcurves.interpolation import LinearInterpolator
from creditcurves.sensitivity.parameter import CurrencyParameterSensitivities
from creditcurves.sensitivity.point import RecoveryRateSensitivity, SensitivityKind

from .base import DateOrTime, ParameterizedCurve

logger = logging.getLogger(__name__)


def _check_recovery_rate(value: float) -> float:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"Recovery rate must be between 0 and 1: {value}")
    return float(value)


class RecoveryRates(ParameterizedCurve):
    """Recovery rate of a legal entity as a function of time."""

    def __init__(self,
                 legal_entity_id: Union[str, StandardId],
                 currency: Union[str, Currency],
                 valuation_date: Union[date, datetime, str],
                 day_count: Union[str, DayCountConvention, None] = None,
                 name: str = ""):
        super().__init__(currency, valuation_date, name, day_count)
        self.legal_entity_id = StandardId.parse(legal_entity_id)

    @property
    def curve_name(self) -> str:
        return self.name or f"{self.legal_entity_id}-{self.currency}-RECOVERY"

    def recovery_rate(self, t: DateOrTime) -> float:
        """Recovery rate at a date or year fraction."""
        return self._recovery_rate(max(self._to_year_fraction(t), 0.0))

    @abstractmethod
    def _recovery_rate(self, year_fraction: float) -> float:
        pass

    @abstractmethod
    def _unit_parameter_sensitivity(self, year_fraction: float) -> np.ndarray:
        """dR(t)/dp_i for each parameter p_i."""
        pass

    def recovery_rate_point_sensitivity(
        self,
        t: DateOrTime,
        sensitivity_currency: Union[str, Currency, None] = None,
        fx_provider: Optional[FxRateProvider] = None,
    ) -> RecoveryRateSensitivity:
        """
        Unit sensitivity of ``recovery_rate(t)`` to the recovery rate at t.

        Pricers scale it by dPV/dR with ``multiplied_by``. Currency handling
        follows `CreditDiscountFactors.zero_rate_point_sensitivity`.
        """
        year_fraction = max(self._to_year_fraction(t), 0.0)
        point = RecoveryRateSensitivity.of(self.currency, year_fraction, self.legal_entity_id, 1.0)
        if sensitivity_currency is None or Currency.of(sensitivity_currency) == self.currency:
            return point
        if fx_provider is not None:
            return point.converted_to(sensitivity_currency, fx_provider)
        return point.with_currency(sensitivity_currency)

    def parameter_sensitivity(self, point_sensitivity: RecoveryRateSensitivity) -> CurrencyParameterSensitivities:
        """Project a recovery-rate point sensitivity onto this curve's parameters."""
        if point_sensitivity.kind is not SensitivityKind.RECOVERY_RATE:
            raise TypeError(
                f"{type(self).__name__} only projects recovery-rate sensitivities, "
                f"got {type(point_sensitivity).__name__}"
            )
        if point_sensitivity.legal_entity_id != self.legal_entity_id:
            raise ValueError(
                f"Sensitivity for legal entity {point_sensitivity.legal_entity_id} cannot be "
                f"projected onto recovery rates of {self.legal_entity_id}"
            )
        if point_sensitivity.curve_currency != self.currency:
            raise ValueError(
                f"Sensitivity to a {point_sensitivity.curve_currency} recovery curve cannot be "
                f"projected onto {self.currency} curve '{self.curve_name}'"
            )
        unit = self._unit_parameter_sensitivity(point_sensitivity.year_fraction)
        values = unit * point_sensitivity.sensitivity
        logger.debug(
            "Projected recovery sensitivity %s at t=%s onto '%s': %s",
            point_sensitivity.sensitivity,
            point_sensitivity.year_fraction,
            self.curve_name,
            values,
        )
        return self.create_parameter_sensitivity(point_sensitivity.currency, values)


class ConstantRecoveryRates(RecoveryRates):
    """The same recovery rate at every time; one parameter."""

    def __init__(self,
                 legal_entity_id: Union[str, StandardId],
                 currency: Union[str, Currency],
                 valuation_date: Union[date, datetime, str],
                 recovery_rate: float,
                 day_count: Union[str, DayCountConvention, None] = None,
                 name: str = ""):
        super().__init__(legal_entity_id, currency, valuation_date, day_count, name)
        self.rate = _check_recovery_rate(recovery_rate)

    @property
    def parameter_count(self) -> int:
        return 1

    @property
    def parameter_keys(self) -> Tuple[float, ...]:
        return (0.0,)

    def get_parameter(self, parameter_index: int) -> float:
        self._check_index(parameter_index)
        return self.rate

    def _with_parameters(self, parameters: Sequence[float]) -> "ConstantRecoveryRates":
        return ConstantRecoveryRates(
            self.legal_entity_id, self.currency, self.valuation_date,
            parameters[0], self.day_count, self.name,
        )

    def _recovery_rate(self, year_fraction: float) -> float:
        return self.rate

    def _unit_parameter_sensitivity(self, year_fraction: float) -> np.ndarray:
        return np.ones(1)


class InterpolatedRecoveryRates(RecoveryRates):
    """Recovery rates at node times, linear in between and flat outside."""

    def __init__(self,
                 legal_entity_id: Union[str, StandardId],
                 currency: Union[str, Currency],
                 valuation_date: Union[date, datetime, str],
                 year_fractions: Sequence[float],
                 recovery_rates: Sequence[float],
                 day_count: Union[str, DayCountConvention, None] = None,
                 name: str = ""):
        super().__init__(legal_entity_id, currency, valuation_date, day_count, name)
        rates = [_check_recovery_rate(r) for r in recovery_rates]
        self.interpolator = LinearInterpolator(year_fractions, rates)

    @property
    def parameter_count(self) -> int:
        return self.interpolator.size

    @property
    def parameter_keys(self) -> Tuple[float, ...]:
        return tuple(self.interpolator.pillars.tolist())

    def get_parameter(self, parameter_index: int) -> float:
        self._check_index(parameter_index)
        return float(self.interpolator.values[parameter_index])

    def _with_parameters(self, parameters: Sequence[float]) -> "InterpolatedRecoveryRates":
        return InterpolatedRecoveryRates(
            self.legal_entity_id, self.currency, self.valuation_date,
            list(self.parameter_keys), list(parameters), self.day_count, self.name,
        )

    def _recovery_rate(self, year_fraction: float) -> float:
        return self.interpolator.interpolate(year_fraction)

    def _unit_parameter_sensitivity(self, year_fraction: float) -> np.ndarray:
        return self.interpolator.parameter_sensitivity(year_fraction)
