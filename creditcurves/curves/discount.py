"""
Credit discount factor implementations.

- `FlatCreditDiscountFactors`: one constant zero rate.
- `ZeroRateCreditDiscountFactors`: zero rates at node year fractions,
  linear or product-linear (ISDA) interpolation.
- `DiscountFactorCreditDiscountFactors`: discount factors at node year
  fractions, log-linear interpolation.

Each only has to say how the zero rate at t moves when one parameter moves;
the base class turns that into parameter sensitivities.
"""
import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from creditcurves.basics.currency import Currency
from creditcurves.config import get_default_config
from creditcurves.conventions.daycount import DayCountConvention
from creditcurves.conventions.year_fraction import YearFractionConverter
from creditcurves.interpolation import (
    LinearInterpolator,
    LogLinearInterpolator,
    ProductLinearInterpolator,
    create_interpolator,
    discount_factor_to_zero_rate,
    zero_rate_to_discount_factor,
)
from creditcurves.utils.dates import add_tenor, to_date

from .base import CreditDiscountFactors

logger = logging.getLogger(__name__)

_ZERO_RATE_INTERPOLATORS = (LinearInterpolator, ProductLinearInterpolator)


class FlatCreditDiscountFactors(CreditDiscountFactors):
    """Single constant continuously compounded zero rate."""

    def __init__(self,
                 currency: Union[str, Currency],
                 valuation_date: Union[date, datetime, str],
                 zero_rate: float,
                 day_count: Union[str, DayCountConvention, None] = None,
                 name: str = ""):
        super().__init__(currency, valuation_date, name, day_count)
        self.rate = float(zero_rate)

    @property
    def parameter_count(self) -> int:
        return 1

    @property
    def parameter_keys(self) -> Tuple[float, ...]:
        return (0.0,)

    def get_parameter(self, parameter_index: int) -> float:
        self._check_index(parameter_index)
        return self.rate

    def _with_parameters(self, parameters: Sequence[float]) -> "FlatCreditDiscountFactors":
        return FlatCreditDiscountFactors(
            self.currency, self.valuation_date, parameters[0], self.day_count, self.name
        )

    def _discount_factor(self, year_fraction: float) -> float:
        return zero_rate_to_discount_factor(self.rate, year_fraction)

    def _zero_rate(self, year_fraction: float) -> float:
        return self.rate

    def _unit_parameter_sensitivity(self, year_fraction: float) -> np.ndarray:
        return np.ones(1)

    def __repr__(self) -> str:
        return (f"FlatCreditDiscountFactors(currency={self.currency}, "
                f"valuation_date={self.valuation_date}, zero_rate={self.rate}, "
                f"day_count='{self.day_count}', name='{self.name}')")


class ZeroRateCreditDiscountFactors(CreditDiscountFactors):
    """
    Credit curve defined by continuously compounded zero rates at node times.

    Interpolation is either ``LINEAR`` on zero rates or ``PRODUCT_LINEAR``
    on zero rate * time (flat forwards between nodes, the ISDA standard
    model convention). Flat zero rate before the first node.
    """

    def __init__(self,
                 currency: Union[str, Currency],
                 valuation_date: Union[date, datetime, str],
                 year_fractions: Sequence[float],
                 zero_rates: Sequence[float],
                 interpolation_method: Optional[str] = None,
                 day_count: Union[str, DayCountConvention, None] = None,
                 name: str = ""):
        """
        Initialize zero-rate credit curve.

        Args:
            currency: Curve currency
            valuation_date: Curve valuation date
            year_fractions: Node times, strictly increasing, on the curve's day count
            zero_rates: Continuously compounded zero rates at the nodes
            interpolation_method: LINEAR or PRODUCT_LINEAR (config default if None)
            day_count: Day count of the curve times (config default if None)
            name: Curve name
        """
        super().__init__(currency, valuation_date, name, day_count)

        if len(year_fractions) != len(zero_rates):
            raise ValueError("Year fractions and zero rates must have same length")
        if any(t < 0 for t in year_fractions):
            raise ValueError("Node year fractions must be non-negative")

        method = interpolation_method or get_default_config().interpolation_method
        self.interpolator = create_interpolator(method, year_fractions, zero_rates)
        if not isinstance(self.interpolator, _ZERO_RATE_INTERPOLATORS):
            raise ValueError(
                f"Interpolation method {method} is not supported on zero rates; "
                f"use LINEAR or PRODUCT_LINEAR"
            )
        self.interpolation_method = method.upper()

    @classmethod
    def from_tenors(cls,
                    currency: Union[str, Currency],
                    valuation_date: Union[date, datetime, str],
                    tenor_rates: Dict[str, float],
                    interpolation_method: Optional[str] = None,
                    day_count: Union[str, DayCountConvention, None] = None,
                    name: str = "") -> "ZeroRateCreditDiscountFactors":
        """
        Build from tenor strings, e.g. ``{"6M": 0.01, "1Y": 0.012, "5Y": 0.02}``.

        Tenors are added to the valuation date without business day
        adjustment and converted with the curve's own day count.
        """
        converter = YearFractionConverter(day_count or get_default_config().day_count)
        start = to_date(valuation_date)
        nodes = sorted(
            (converter.year_fraction(start, add_tenor(start, tenor)), rate)
            for tenor, rate in tenor_rates.items()
        )
        return cls(
            currency,
            start,
            [t for t, _ in nodes],
            [r for _, r in nodes],
            interpolation_method=interpolation_method,
            day_count=converter.day_count,
            name=name,
        )

    @property
    def year_fractions(self) -> List[float]:
        return self.interpolator.pillars.tolist()

    @property
    def zero_rates(self) -> List[float]:
        return self.interpolator.values.tolist()

    @property
    def parameter_count(self) -> int:
        return self.interpolator.size

    @property
    def parameter_keys(self) -> Tuple[float, ...]:
        return tuple(self.year_fractions)

    def get_parameter(self, parameter_index: int) -> float:
        self._check_index(parameter_index)
        return float(self.interpolator.values[parameter_index])

    def _with_parameters(self, parameters: Sequence[float]) -> "ZeroRateCreditDiscountFactors":
        return ZeroRateCreditDiscountFactors(
            self.currency,
            self.valuation_date,
            self.year_fractions,
            list(parameters),
            interpolation_method=self.interpolation_method,
            day_count=self.day_count,
            name=self.name,
        )

    def _discount_factor(self, year_fraction: float) -> float:
        return zero_rate_to_discount_factor(self.interpolator.interpolate(year_fraction), year_fraction)

    def _zero_rate(self, year_fraction: float) -> float:
        return self.interpolator.interpolate(year_fraction)

    def _unit_parameter_sensitivity(self, year_fraction: float) -> np.ndarray:
        return self.interpolator.parameter_sensitivity(year_fraction)

    def __repr__(self) -> str:
        return (f"ZeroRateCreditDiscountFactors(currency={self.currency}, "
                f"valuation_date={self.valuation_date}, "
                f"year_fractions={self.year_fractions}, "
                f"zero_rates={self.zero_rates}, "
                f"interpolation_method='{self.interpolation_method}', "
                f"name='{self.name}')")


class DiscountFactorCreditDiscountFactors(CreditDiscountFactors):
    """
    Credit curve defined by discount factors at node times (log-linear).

    Parameters are the node discount factors, so projecting a zero-rate
    sensitivity needs one more chain-rule step:
    dz/dDF_i = -(1 / (t * DF(t))) * dDF(t)/dDF_i.
    """

    def __init__(self,
                 currency: Union[str, Currency],
                 valuation_date: Union[date, datetime, str],
                 year_fractions: Sequence[float],
                 discount_factors: Sequence[float],
                 day_count: Union[str, DayCountConvention, None] = None,
                 name: str = ""):
        super().__init__(currency, valuation_date, name, day_count)

        if len(year_fractions) != len(discount_factors):
            raise ValueError("Year fractions and discount factors must have same length")

        # Validate discount factors
        for i, df in enumerate(discount_factors):
            if df <= 0:
                raise ValueError(f"Discount factor at node {i} must be positive: {df}")

        # Discount factors should be decreasing; warn on large increases
        for i in range(1, len(discount_factors)):
            increase = discount_factors[i] - discount_factors[i - 1]
            if increase > 1e-6:
                logger.warning(
                    "Discount factors increasing at node %s of '%s' (increase = %.8f)",
                    i,
                    self.curve_name,
                    increase,
                )

        self.interpolator = LogLinearInterpolator(year_fractions, discount_factors)

    @property
    def year_fractions(self) -> List[float]:
        return self.interpolator.pillars.tolist()

    @property
    def discount_factors(self) -> List[float]:
        return self.interpolator.values.tolist()

    @property
    def parameter_count(self) -> int:
        return self.interpolator.size

    @property
    def parameter_keys(self) -> Tuple[float, ...]:
        return tuple(self.year_fractions)

    def get_parameter(self, parameter_index: int) -> float:
        self._check_index(parameter_index)
        return float(self.interpolator.values[parameter_index])

    def _with_parameters(self, parameters: Sequence[float]) -> "DiscountFactorCreditDiscountFactors":
        return DiscountFactorCreditDiscountFactors(
            self.currency,
            self.valuation_date,
            self.year_fractions,
            list(parameters),
            day_count=self.day_count,
            name=self.name,
        )

    def _discount_factor(self, year_fraction: float) -> float:
        return self.interpolator.interpolate(year_fraction)

    def _zero_rate(self, year_fraction: float) -> float:
        if year_fraction < get_default_config().effective_zero:
            # short end: zero rate of the first node, held flat to t = 0
            return discount_factor_to_zero_rate(
                float(self.interpolator.values[0]), float(self.interpolator.pillars[0])
            )
        return -self.interpolator.log_interpolate(year_fraction) / year_fraction

    def _unit_parameter_sensitivity(self, year_fraction: float) -> np.ndarray:
        if year_fraction < get_default_config().effective_zero:
            return np.zeros(self.parameter_count)
        df_val = self._discount_factor(year_fraction)
        return self.interpolator.parameter_sensitivity(year_fraction) * (-1.0 / (year_fraction * df_val))

    def __repr__(self) -> str:
        return (f"DiscountFactorCreditDiscountFactors(currency={self.currency}, "
                f"valuation_date={self.valuation_date}, "
                f"year_fractions={self.year_fractions}, "
                f"discount_factors={self.discount_factors}, "
                f"name='{self.name}')")


def create_flat_credit_curve(currency: Union[str, Currency],
                             valuation_date: Union[date, datetime, str],
                             flat_rate: float,
                             max_time: float = 30.0,
                             num_pillars: int = 10,
                             interpolation_method: Optional[str] = None,
                             name: str = "") -> ZeroRateCreditDiscountFactors:
    """
    Create a flat zero-rate credit curve with evenly spaced nodes, for testing.

    Args:
        currency: Curve currency
        valuation_date: Curve valuation date
        flat_rate: Flat zero rate (decimal)
        max_time: Maximum node time in years
        num_pillars: Number of nodes
        interpolation_method: LINEAR or PRODUCT_LINEAR
        name: Curve name

    Returns:
        Flat credit curve
    """
    if num_pillars < 2:
        raise ValueError("Need at least 2 pillars; use FlatCreditDiscountFactors for one")
    times = [(i + 1) * max_time / num_pillars for i in range(num_pillars)]

    return ZeroRateCreditDiscountFactors(
        currency,
        valuation_date,
        times,
        [flat_rate] * num_pillars,
        interpolation_method=interpolation_method,
        name=name,
    )
