"""Survival probabilities of a legal entity, backed by a credit discount curve."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

from creditcurves.basics.currency import Currency, StandardId
from creditcurves.basics.fx import FxRateProvider
from creditcurves.sensitivity.parameter import (
    CurrencyParameterSensitivities,
    CurrencyParameterSensitivity,
)
from creditcurves.sensitivity.point import ZeroRateSensitivity

from .base import CreditDiscountFactors, DateOrTime


class LegalEntitySurvivalProbabilities:
    """
    Survival curve of one legal entity in one currency.

    The wrapped `CreditDiscountFactors` holds the curve math: its discount
    factor is read as a survival probability and its zero rate as the
    average hazard rate. Point sensitivities are tagged with the legal
    entity so aggregation can find this curve again.
    """

    def __init__(
        self,
        legal_entity_id: Union[str, StandardId],
        survival_probabilities: CreditDiscountFactors,
    ):
        self.legal_entity_id = StandardId.parse(legal_entity_id)
        self.survival_probabilities = survival_probabilities

    @property
    def currency(self) -> Currency:
        return self.survival_probabilities.currency

    @property
    def valuation_date(self):
        return self.survival_probabilities.valuation_date

    @property
    def curve_name(self) -> str:
        """The wrapped curve's explicit name, else one built from entity and currency."""
        return self.survival_probabilities.name or f"{self.legal_entity_id}-{self.currency}-SURVIVAL"

    @property
    def parameter_count(self) -> int:
        return self.survival_probabilities.parameter_count

    @property
    def parameter_keys(self) -> Tuple[float, ...]:
        return self.survival_probabilities.parameter_keys

    def relative_year_fraction(self, dt) -> float:
        return self.survival_probabilities.relative_year_fraction(dt)

    def survival_probability(self, t: DateOrTime) -> float:
        """Probability that the entity has not defaulted by t."""
        return self.survival_probabilities.discount_factor(t)

    def zero_rate(self, t: DateOrTime) -> float:
        return self.survival_probabilities.zero_rate(t)

    def zero_rate_point_sensitivity(
        self,
        t: DateOrTime,
        sensitivity_currency: Union[str, Currency, None] = None,
        fx_provider: Optional[FxRateProvider] = None,
    ) -> ZeroRateSensitivity:
        point = self.survival_probabilities.zero_rate_point_sensitivity(
            t, sensitivity_currency, fx_provider
        )
        return point.with_legal_entity_id(self.legal_entity_id)

    def parameter_sensitivity(self, point_sensitivity: ZeroRateSensitivity) -> CurrencyParameterSensitivities:
        if point_sensitivity.legal_entity_id != self.legal_entity_id:
            raise ValueError(
                f"Sensitivity for legal entity {point_sensitivity.legal_entity_id} cannot be "
                f"projected onto the survival curve of {self.legal_entity_id}"
            )
        return self._renamed(self.survival_probabilities.parameter_sensitivity(point_sensitivity))

    def create_parameter_sensitivity(
        self, currency: Union[str, Currency], sensitivities: Sequence[float]
    ) -> CurrencyParameterSensitivities:
        return self._renamed(
            self.survival_probabilities.create_parameter_sensitivity(currency, sensitivities)
        )

    def _renamed(self, sensitivities: CurrencyParameterSensitivities) -> CurrencyParameterSensitivities:
        # entries carry the survival curve name, not the wrapped curve's default
        return CurrencyParameterSensitivities(
            CurrencyParameterSensitivity(self.curve_name, e.currency, e.parameter_keys, e.sensitivity)
            for e in sensitivities
        )

    def with_parameter(self, parameter_index: int, new_value: float) -> "LegalEntitySurvivalProbabilities":
        return LegalEntitySurvivalProbabilities(
            self.legal_entity_id,
            self.survival_probabilities.with_parameter(parameter_index, new_value),
        )

    def __repr__(self) -> str:
        return (f"LegalEntitySurvivalProbabilities(legal_entity_id={self.legal_entity_id}, "
                f"survival_probabilities={self.survival_probabilities!r})")
