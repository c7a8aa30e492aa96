"""
Collections of point sensitivities.

`MutablePointSensitivities` is the running total of one pricing
computation: it is created by that computation, filled through ``add`` /
``build_into`` and frozen with ``build``. It must not be shared between
concurrent computations; merge the built `PointSensitivities` afterwards.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, List, Tuple, Union

if TYPE_CHECKING:
    from creditcurves.basics.fx import FxRateProvider
    from creditcurves.sensitivity.point import PointSensitivity


def _merge_by_key(points: Iterable["PointSensitivity"]) -> List["PointSensitivity"]:
    """Stable sort by key, then sum the values of runs sharing a key."""
    merged: List["PointSensitivity"] = []
    for point in sorted((p.normalize() for p in points), key=lambda p: p.key()):
        if merged and merged[-1].key() == point.key():
            last = merged[-1]
            merged[-1] = last.with_sensitivity(last.sensitivity + point.sensitivity)
        else:
            merged.append(point)
    return merged


class MutablePointSensitivities:
    """Mutable running total of point sensitivities for one computation."""

    def __init__(self, sensitivities: Iterable["PointSensitivity"] = ()):
        self._sensitivities: List["PointSensitivity"] = list(sensitivities)

    def size(self) -> int:
        return len(self._sensitivities)

    def __len__(self) -> int:
        return len(self._sensitivities)

    def __iter__(self) -> Iterator["PointSensitivity"]:
        return iter(self._sensitivities)

    @property
    def sensitivities(self) -> Tuple["PointSensitivity", ...]:
        return tuple(self._sensitivities)

    def add(self, point: "PointSensitivity") -> "MutablePointSensitivities":
        self._sensitivities.append(point)
        return self

    def add_all(
        self,
        others: Union["MutablePointSensitivities", "PointSensitivities", Iterable["PointSensitivity"]],
    ) -> "MutablePointSensitivities":
        for point in others:
            point.build_into(self)
        return self

    def build_into(self, combination: "MutablePointSensitivities") -> "MutablePointSensitivities":
        if combination is self:
            return self
        return combination.add_all(self._sensitivities)

    def combined_with(self, other) -> "MutablePointSensitivities":
        """Add another sensitivity or collection into this one."""
        return other.build_into(self)

    def multiplied_by(self, factor: float) -> "MutablePointSensitivities":
        return self.map_sensitivity(lambda value: value * factor)

    def map_sensitivity(self, operator: Callable[[float], float]) -> "MutablePointSensitivities":
        self._sensitivities = [p.map_sensitivity(operator) for p in self._sensitivities]
        return self

    def with_currency(self, currency) -> "MutablePointSensitivities":
        self._sensitivities = [p.with_currency(currency) for p in self._sensitivities]
        return self

    def converted_to(self, result_currency, rate_provider: "FxRateProvider") -> "MutablePointSensitivities":
        """New accumulator with every value converted to ``result_currency``."""
        return MutablePointSensitivities(
            p.converted_to(result_currency, rate_provider) for p in self._sensitivities
        )

    def sort(self) -> "MutablePointSensitivities":
        self._sensitivities.sort(key=lambda p: p.key())
        return self

    def normalize(self) -> "MutablePointSensitivities":
        """Sort and merge entries sharing a key by summing their values."""
        self._sensitivities = _merge_by_key(self._sensitivities)
        return self

    def cloned(self) -> "MutablePointSensitivities":
        return MutablePointSensitivities(self._sensitivities)

    def build(self) -> "PointSensitivities":
        """Immutable snapshot of the current content."""
        return PointSensitivities(self._sensitivities)

    def __repr__(self) -> str:
        return f"MutablePointSensitivities({self._sensitivities!r})"


class PointSensitivities:
    """Immutable sequence of point sensitivities."""

    __slots__ = ("_sensitivities",)

    def __init__(self, sensitivities: Iterable["PointSensitivity"] = ()):
        object.__setattr__(self, "_sensitivities", tuple(sensitivities))

    def __setattr__(self, name, value):
        raise AttributeError("PointSensitivities is immutable")

    @classmethod
    def of(cls, *sensitivities: "PointSensitivity") -> "PointSensitivities":
        return cls(sensitivities)

    @classmethod
    def empty(cls) -> "PointSensitivities":
        return cls(())

    @property
    def sensitivities(self) -> Tuple["PointSensitivity", ...]:
        return self._sensitivities

    def size(self) -> int:
        return len(self._sensitivities)

    def __len__(self) -> int:
        return len(self._sensitivities)

    def __iter__(self) -> Iterator["PointSensitivity"]:
        return iter(self._sensitivities)

    def __getitem__(self, index: int) -> "PointSensitivity":
        return self._sensitivities[index]

    def build_into(self, combination: MutablePointSensitivities) -> MutablePointSensitivities:
        return combination.add_all(self._sensitivities)

    def combined_with(self, other: "PointSensitivities") -> "PointSensitivities":
        return PointSensitivities(self._sensitivities + tuple(other))

    def multiplied_by(self, factor: float) -> "PointSensitivities":
        return self.map_sensitivities(lambda value: value * factor)

    def map_sensitivities(self, operator: Callable[[float], float]) -> "PointSensitivities":
        return PointSensitivities(p.map_sensitivity(operator) for p in self._sensitivities)

    def normalized(self) -> "PointSensitivities":
        return PointSensitivities(_merge_by_key(self._sensitivities))

    def converted_to(self, result_currency, rate_provider: "FxRateProvider") -> "PointSensitivities":
        return PointSensitivities(
            p.converted_to(result_currency, rate_provider) for p in self._sensitivities
        )

    def to_mutable(self) -> MutablePointSensitivities:
        return MutablePointSensitivities(self._sensitivities)

    def equal_with_tolerance(self, other: "PointSensitivities", tolerance: float) -> bool:
        """Equal after normalization, with values compared within ``tolerance``."""
        mine = self.normalized().sensitivities
        theirs = PointSensitivities(other).normalized().sensitivities
        if len(mine) != len(theirs):
            return False
        for a, b in zip(mine, theirs):
            if a.key() != b.key():
                return False
            if not math.isclose(a.sensitivity, b.sensitivity, rel_tol=0.0, abs_tol=tolerance):
                return False
        return True

    def __eq__(self, other) -> bool:
        return isinstance(other, PointSensitivities) and other._sensitivities == self._sensitivities

    def __hash__(self) -> int:
        return hash(self._sensitivities)

    def __repr__(self) -> str:
        return f"PointSensitivities({list(self._sensitivities)!r})"
