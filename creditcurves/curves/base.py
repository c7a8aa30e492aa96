"""
Base curve classes for credit discounting.

`ParameterizedCurve` carries what every curve view shares: currency,
valuation date, the year-fraction converter and a vector of parameters
that sensitivities are expressed against. `CreditDiscountFactors` adds the
discount factor / zero rate view and the point-to-parameter projection.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Callable, Optional, Sequence, Tuple, Union

import numpy as np

from creditcurves.basics.currency import Currency
from creditcurves.basics.fx import FxRateProvider
from creditcurves.config import get_default_config
from creditcurves.conventions.daycount import DayCountConvention
from creditcurves.conventions.year_fraction import YearFractionConverter
from creditcurves.errors import IndexOutOfRange, ParameterCountMismatch
from creditcurves.sensitivity.parameter import (
    CurrencyParameterSensitivities,
    CurrencyParameterSensitivity,
)
from creditcurves.sensitivity.point import SensitivityKind, ZeroRateSensitivity
from creditcurves.utils.dates import is_date_like, to_date

logger = logging.getLogger(__name__)

DateOrTime = Union[date, datetime, str, float]
Perturbation = Callable[[int, float, float], float]


class ParameterizedCurve(ABC):
    """A curve defined by a finite vector of parameters at year-fraction keys."""

    def __init__(
        self,
        currency: Union[str, Currency],
        valuation_date: Union[date, datetime, str],
        name: str = "",
        day_count: Union[str, DayCountConvention, None] = None,
    ):
        """
        Initialize base curve.

        Args:
            currency: Currency the curve is defined in
            valuation_date: Curve reference/valuation date
            name: Curve name, used to label parameter sensitivities
            day_count: Day-count convention converting dates to curve times
        """
        self._currency = Currency.of(currency)
        self.valuation_date = to_date(valuation_date)
        self.name = name
        self._converter = YearFractionConverter(day_count or get_default_config().day_count)

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def day_count(self) -> DayCountConvention:
        return self._converter.day_count

    @property
    def curve_name(self) -> str:
        return self.name or f"{self._currency}-{type(self).__name__}"

    def relative_year_fraction(self, dt: Union[date, datetime, str]) -> float:
        """Year fraction from the valuation date to ``dt`` on this curve's basis."""
        return self._converter.year_fraction(self.valuation_date, dt)

    def _to_year_fraction(self, t: DateOrTime) -> float:
        """Dates go through the curve's converter; numbers are already year fractions."""
        if is_date_like(t):
            return self.relative_year_fraction(t)
        return float(t)

    # -- parameters -------------------------------------------------------

    @property
    @abstractmethod
    def parameter_count(self) -> int:
        pass

    @property
    @abstractmethod
    def parameter_keys(self) -> Tuple[float, ...]:
        """Year fraction of each parameter (the node times)."""
        pass

    @abstractmethod
    def get_parameter(self, parameter_index: int) -> float:
        pass

    @abstractmethod
    def _with_parameters(self, parameters: Sequence[float]) -> "ParameterizedCurve":
        """New instance of the same curve with every parameter replaced."""
        pass

    def _check_index(self, parameter_index: int) -> None:
        if not 0 <= parameter_index < self.parameter_count:
            raise IndexOutOfRange(
                f"Parameter index {parameter_index} outside [0, {self.parameter_count}) "
                f"for curve '{self.curve_name}'"
            )

    def with_parameter(self, parameter_index: int, new_value: float) -> "ParameterizedCurve":
        """Return a new curve with one parameter replaced."""
        self._check_index(parameter_index)
        parameters = [self.get_parameter(i) for i in range(self.parameter_count)]
        parameters[parameter_index] = float(new_value)
        return self._with_parameters(parameters)

    def with_perturbation(self, perturbation: Perturbation) -> "ParameterizedCurve":
        """Return a new curve with ``perturbation(index, value, key)`` applied to every parameter."""
        keys = self.parameter_keys
        parameters = [
            perturbation(i, self.get_parameter(i), keys[i]) for i in range(self.parameter_count)
        ]
        return self._with_parameters(parameters)

    def create_parameter_sensitivity(
        self, currency: Union[str, Currency], sensitivities: Sequence[float]
    ) -> CurrencyParameterSensitivities:
        """Wrap pre-computed per-parameter values as this curve's sensitivity."""
        values = np.asarray(sensitivities, dtype=float)
        if values.shape != (self.parameter_count,):
            raise ParameterCountMismatch(
                f"Curve '{self.curve_name}' has {self.parameter_count} parameters "
                f"but {values.size} sensitivity values were given"
            )
        entry = CurrencyParameterSensitivity(
            self.curve_name, currency, self.parameter_keys, values
        )
        return CurrencyParameterSensitivities.of(entry)

    def find_data(self, name: str) -> Optional["ParameterizedCurve"]:
        """The curve itself when ``name`` matches, otherwise None."""
        return self if name == self.curve_name else None

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.curve_name}, {self.parameter_count} parameters)"


class CreditDiscountFactors(ParameterizedCurve):
    """
    Discount factors and zero rates of a credit (or discount) curve.

    Discount factor and continuously compounded zero rate are two views of
    the same state: for t > 0, ``discount_factor(t) == exp(-zero_rate(t) * t)``.
    Every query accepts a date (converted with ``relative_year_fraction``)
    or a year fraction. On or before the valuation date the discount factor
    is exactly 1. At t == 0 the zero rate is the short-end rate, i.e. the
    limit of the zero rate as t -> 0.

    Implementations supply the curve math for t > 0 and the unit
    sensitivity dz(t)/dp_i of the zero rate to each parameter.
    """

    def discount_factor(self, t: DateOrTime) -> float:
        """Discount factor at a date or year fraction."""
        year_fraction = self._to_year_fraction(t)
        if year_fraction <= 0:
            return 1.0
        return self._discount_factor(year_fraction)

    def zero_rate(self, t: DateOrTime) -> float:
        """Continuously compounded zero rate at a date or year fraction."""
        year_fraction = self._to_year_fraction(t)
        return self._zero_rate(max(year_fraction, 0.0))

    def zero_rate_year_fraction(self, t: DateOrTime) -> float:
        """zero_rate(t) * t, i.e. -ln(discount_factor(t)) for t > 0."""
        year_fraction = max(self._to_year_fraction(t), 0.0)
        return self._zero_rate(year_fraction) * year_fraction

    @abstractmethod
    def _discount_factor(self, year_fraction: float) -> float:
        """Discount factor for year_fraction > 0."""
        pass

    @abstractmethod
    def _zero_rate(self, year_fraction: float) -> float:
        """Zero rate for year_fraction >= 0."""
        pass

    @abstractmethod
    def _unit_parameter_sensitivity(self, year_fraction: float) -> np.ndarray:
        """dz(t)/dp_i for each parameter p_i."""
        pass

    # -- sensitivities ----------------------------------------------------

    def zero_rate_point_sensitivity(
        self,
        t: DateOrTime,
        sensitivity_currency: Union[str, Currency, None] = None,
        fx_provider: Optional[FxRateProvider] = None,
    ) -> ZeroRateSensitivity:
        """
        Sensitivity of ``discount_factor(t)`` to the zero rate at t.

        The value is ``-discount_factor(t) * t``. On or before the valuation
        date the discount factor does not depend on the curve, so the value
        is 0 at year fraction 0.

        Args:
            t: Date or year fraction
            sensitivity_currency: Currency of the priced quantity; defaults to
                the curve currency
            fx_provider: When given and the currencies differ, the value is
                converted with the provider's rate; otherwise only the
                currency tag changes

        Returns:
            The point sensitivity
        """
        year_fraction = self._to_year_fraction(t)
        if year_fraction <= 0:
            point = ZeroRateSensitivity.of(self.currency, 0.0, 0.0)
        else:
            point = ZeroRateSensitivity.of(
                self.currency, year_fraction, -self.discount_factor(year_fraction) * year_fraction
            )
        if sensitivity_currency is None:
            return point
        target = Currency.of(sensitivity_currency)
        if target == self.currency:
            return point
        if fx_provider is not None:
            return point.converted_to(target, fx_provider)
        return point.with_currency(target)

    def parameter_sensitivity(self, point_sensitivity: ZeroRateSensitivity) -> CurrencyParameterSensitivities:
        """Project a zero-rate point sensitivity onto this curve's parameters (chain rule)."""
        if point_sensitivity.kind is not SensitivityKind.ZERO_RATE:
            raise TypeError(
                f"{type(self).__name__} only projects zero-rate sensitivities, "
                f"got {type(point_sensitivity).__name__}"
            )
        if point_sensitivity.curve_currency != self.currency:
            raise ValueError(
                f"Sensitivity to a {point_sensitivity.curve_currency} curve cannot be "
                f"projected onto {self.currency} curve '{self.curve_name}'"
            )
        unit = self._unit_parameter_sensitivity(point_sensitivity.year_fraction)
        values = unit * point_sensitivity.sensitivity
        logger.debug(
            "Projected %s at t=%s onto '%s': %s",
            point_sensitivity.sensitivity,
            point_sensitivity.year_fraction,
            self.curve_name,
            values,
        )
        return self.create_parameter_sensitivity(point_sensitivity.currency, values)
