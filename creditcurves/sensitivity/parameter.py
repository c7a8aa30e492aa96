"""
Parameter ("bucketed") sensitivities: one value per curve parameter.

A `CurrencyParameterSensitivity` belongs to one curve and one currency and
holds a numpy vector whose length is the curve's parameter count.
`CurrencyParameterSensitivities` keeps at most one entry per
(curve name, currency); adding another entry for the same pair sums the
vectors element-wise.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from creditcurves.basics.currency import Currency
from creditcurves.basics.fx import FxRateProvider
from creditcurves.errors import ParameterCountMismatch

logger = logging.getLogger(__name__)

SensitivityEntryKey = Tuple[str, Currency]


class CurrencyParameterSensitivity:
    """Sensitivity of a priced quantity to each parameter of one curve."""

    __slots__ = ("curve_name", "currency", "parameter_keys", "_sensitivity")

    def __init__(
        self,
        curve_name: str,
        currency: Union[str, Currency],
        parameter_keys: Sequence,
        sensitivity: Sequence[float],
    ):
        values = np.array(sensitivity, dtype=float)
        if values.ndim != 1:
            raise ValueError("Sensitivity must be a one-dimensional vector")
        keys = tuple(parameter_keys)
        if len(keys) != len(values):
            raise ParameterCountMismatch(
                f"Curve '{curve_name}' has {len(keys)} parameters "
                f"but {len(values)} sensitivity values were given"
            )
        values.setflags(write=False)
        self.curve_name = curve_name
        self.currency = Currency.of(currency)
        self.parameter_keys = keys
        self._sensitivity = values

    @property
    def sensitivity(self) -> np.ndarray:
        """Read-only sensitivity vector."""
        return self._sensitivity

    @property
    def parameter_count(self) -> int:
        return len(self._sensitivity)

    def key(self) -> SensitivityEntryKey:
        return (self.curve_name, self.currency)

    def with_sensitivity(self, sensitivity: Sequence[float]) -> "CurrencyParameterSensitivity":
        return CurrencyParameterSensitivity(
            self.curve_name, self.currency, self.parameter_keys, sensitivity
        )

    def plus(
        self, other: Union["CurrencyParameterSensitivity", Sequence[float]]
    ) -> "CurrencyParameterSensitivity":
        """Element-wise sum with another entry for the same curve, or with a raw vector."""
        if isinstance(other, CurrencyParameterSensitivity):
            if other.key() != self.key():
                raise ValueError(
                    f"Cannot add sensitivities of {other.key()} to {self.key()}"
                )
            if other.parameter_keys != self.parameter_keys:
                raise ValueError(
                    f"Cannot add sensitivities of curve '{self.curve_name}' with different "
                    f"parameter keys: {other.parameter_keys} vs {self.parameter_keys}"
                )
            other_values = other.sensitivity
        else:
            other_values = np.asarray(other, dtype=float)
        if len(other_values) != self.parameter_count:
            raise ParameterCountMismatch(
                f"Curve '{self.curve_name}' has {self.parameter_count} parameters "
                f"but {len(other_values)} sensitivity values were given"
            )
        return self.with_sensitivity(self._sensitivity + other_values)

    def multiplied_by(self, factor: float) -> "CurrencyParameterSensitivity":
        return self.with_sensitivity(self._sensitivity * factor)

    def map_sensitivity(self, operator: Callable[[float], float]) -> "CurrencyParameterSensitivity":
        return self.with_sensitivity([operator(v) for v in self._sensitivity])

    def converted_to(
        self, result_currency: Union[str, Currency], rate_provider: FxRateProvider
    ) -> "CurrencyParameterSensitivity":
        target = Currency.of(result_currency)
        if target == self.currency:
            return self
        fx_rate = rate_provider.fx_rate(self.currency, target)
        return CurrencyParameterSensitivity(
            self.curve_name, target, self.parameter_keys, self._sensitivity * fx_rate
        )

    def total(self) -> float:
        return float(self._sensitivity.sum())

    def equal_with_tolerance(self, other: "CurrencyParameterSensitivity", tolerance: float) -> bool:
        return (
            other.key() == self.key()
            and other.parameter_count == self.parameter_count
            and bool(np.allclose(self._sensitivity, other.sensitivity, rtol=0.0, atol=tolerance))
        )

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, CurrencyParameterSensitivity)
            and other.key() == self.key()
            and other.parameter_keys == self.parameter_keys
            and np.array_equal(other.sensitivity, self._sensitivity)
        )

    def __hash__(self) -> int:
        return hash((self.key(), self.parameter_keys, self._sensitivity.tobytes()))

    def __repr__(self) -> str:
        return (f"CurrencyParameterSensitivity(curve_name='{self.curve_name}', "
                f"currency={self.currency}, sensitivity={self._sensitivity.tolist()})")


class CurrencyParameterSensitivities:
    """Immutable, ordered collection of parameter sensitivities."""

    def __init__(self, sensitivities: Iterable[CurrencyParameterSensitivity] = ()):
        merged: Dict[SensitivityEntryKey, CurrencyParameterSensitivity] = {}
        for entry in sensitivities:
            existing = merged.get(entry.key())
            merged[entry.key()] = entry if existing is None else existing.plus(entry)
        self._entries = merged

    @classmethod
    def of(cls, *sensitivities: CurrencyParameterSensitivity) -> "CurrencyParameterSensitivities":
        return cls(sensitivities)

    @classmethod
    def empty(cls) -> "CurrencyParameterSensitivities":
        return cls(())

    @property
    def sensitivities(self) -> Tuple[CurrencyParameterSensitivity, ...]:
        return tuple(self._entries.values())

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CurrencyParameterSensitivity]:
        return iter(self._entries.values())

    def find(
        self, curve_name: str, currency: Union[str, Currency]
    ) -> Optional[CurrencyParameterSensitivity]:
        return self._entries.get((curve_name, Currency.of(currency)))

    def get(self, curve_name: str, currency: Union[str, Currency]) -> CurrencyParameterSensitivity:
        entry = self.find(curve_name, currency)
        if entry is None:
            raise KeyError(f"No sensitivity for curve '{curve_name}' in {Currency.of(currency)}")
        return entry

    def combined_with(
        self,
        other: Union[CurrencyParameterSensitivity, "CurrencyParameterSensitivities"],
    ) -> "CurrencyParameterSensitivities":
        """Merge, summing vectors of entries sharing (curve name, currency)."""
        extra = [other] if isinstance(other, CurrencyParameterSensitivity) else list(other)
        return CurrencyParameterSensitivities(list(self._entries.values()) + extra)

    def multiplied_by(self, factor: float) -> "CurrencyParameterSensitivities":
        return CurrencyParameterSensitivities(e.multiplied_by(factor) for e in self)

    def map_sensitivities(self, operator: Callable[[float], float]) -> "CurrencyParameterSensitivities":
        return CurrencyParameterSensitivities(e.map_sensitivity(operator) for e in self)

    def converted_to(
        self, result_currency: Union[str, Currency], rate_provider: FxRateProvider
    ) -> "CurrencyParameterSensitivities":
        return CurrencyParameterSensitivities(
            e.converted_to(result_currency, rate_provider) for e in self
        )

    def total(self, result_currency: Union[str, Currency], rate_provider: FxRateProvider) -> float:
        """Sum of every parameter sensitivity, expressed in ``result_currency``."""
        return sum(e.converted_to(result_currency, rate_provider).total() for e in self)

    def equal_with_tolerance(self, other: "CurrencyParameterSensitivities", tolerance: float) -> bool:
        keys = set(self._entries) | {e.key() for e in other}
        for curve_name, currency in keys:
            mine = self.find(curve_name, currency)
            theirs = other.find(curve_name, currency)
            if mine is None or theirs is None:
                present = mine if mine is not None else theirs
                # a missing entry only matches an all-zero vector
                if not np.allclose(present.sensitivity, 0.0, rtol=0.0, atol=tolerance):
                    return False
            elif not mine.equal_with_tolerance(theirs, tolerance):
                return False
        return True

    def to_frame(self) -> pd.DataFrame:
        """One row per curve parameter, for risk reports."""
        rows: List[dict] = []
        for entry in self:
            for index, (key, value) in enumerate(zip(entry.parameter_keys, entry.sensitivity)):
                rows.append({
                    "curve_name": entry.curve_name,
                    "currency": entry.currency.code,
                    "parameter_index": index,
                    "parameter_key": key,
                    "sensitivity": float(value),
                })
        logger.debug("Rendering %s parameter sensitivity rows", len(rows))
        return pd.DataFrame(
            rows,
            columns=["curve_name", "currency", "parameter_index", "parameter_key", "sensitivity"],
        )

    def __eq__(self, other) -> bool:
        return isinstance(other, CurrencyParameterSensitivities) and other._entries == self._entries

    def __hash__(self) -> int:
        return hash(tuple(self._entries.values()))

    def __repr__(self) -> str:
        return f"CurrencyParameterSensitivities({list(self._entries.values())!r})"
