"""Tests for CurrencyParameterSensitivity and CurrencyParameterSensitivities."""

import numpy as np
import pytest

from creditcurves.basics import EUR, USD, FxMatrix
from creditcurves.errors import ParameterCountMismatch
from creditcurves.sensitivity import (
    CurrencyParameterSensitivities,
    CurrencyParameterSensitivity,
)


def _entry(name="USD-DSC", currency=USD, values=(1.0, 2.0, 3.0)):
    return CurrencyParameterSensitivity(name, currency, (0.5, 1.0, 2.0), values)


def test_length_must_match_parameter_keys() -> None:
    """One value per parameter."""
    with pytest.raises(ParameterCountMismatch, match="has 3 parameters"):
        CurrencyParameterSensitivity("C", USD, (0.5, 1.0, 2.0), [1.0, 2.0])


def test_vector_is_read_only() -> None:
    """The stored vector cannot be modified in place."""
    entry = _entry()
    with pytest.raises(ValueError):
        entry.sensitivity[0] = 10.0


def test_input_array_is_copied() -> None:
    """Changing the caller's array does not leak into the entry."""
    values = np.array([1.0, 2.0, 3.0])
    entry = _entry(values=values)
    values[0] = 99.0
    assert entry.sensitivity[0] == 1.0


def test_plus() -> None:
    """Element-wise addition with an entry or a raw vector."""
    total = _entry().plus(_entry(values=(1.0, 1.0, 1.0)))
    np.testing.assert_array_equal(total.sensitivity, [2.0, 3.0, 4.0])
    np.testing.assert_array_equal(_entry().plus([1.0, 0.0, 0.0]).sensitivity, [2.0, 2.0, 3.0])
    with pytest.raises(ParameterCountMismatch):
        _entry().plus([1.0, 2.0])
    with pytest.raises(ValueError, match="Cannot add"):
        _entry().plus(_entry(name="OTHER"))


def test_entry_transforms() -> None:
    """Scaling, mapping and FX conversion."""
    entry = _entry()
    np.testing.assert_array_equal(entry.multiplied_by(2.0).sensitivity, [2.0, 4.0, 6.0])
    np.testing.assert_array_equal(entry.map_sensitivity(lambda v: -v).sensitivity, [-1.0, -2.0, -3.0])
    converted = entry.converted_to(EUR, FxMatrix({"EURUSD": 2.0}))
    assert converted.currency == EUR
    np.testing.assert_allclose(converted.sensitivity, [0.5, 1.0, 1.5])
    assert entry.total() == 6.0


def test_collection_merges_same_curve_and_currency() -> None:
    """At most one entry per (curve name, currency)."""
    sens = CurrencyParameterSensitivities.of(_entry(), _entry(), _entry(currency=EUR))
    assert sens.size() == 2
    np.testing.assert_array_equal(sens.get("USD-DSC", USD).sensitivity, [2.0, 4.0, 6.0])
    np.testing.assert_array_equal(sens.get("USD-DSC", "EUR").sensitivity, [1.0, 2.0, 3.0])


def test_collection_combined_with() -> None:
    """Combining adds matching entries and appends new ones."""
    sens = CurrencyParameterSensitivities.of(_entry())
    combined = sens.combined_with(_entry()).combined_with(CurrencyParameterSensitivities.of(_entry(name="B")))
    assert combined.size() == 2
    np.testing.assert_array_equal(combined.get("USD-DSC", USD).sensitivity, [2.0, 4.0, 6.0])
    assert sens.size() == 1


def test_get_missing_entry() -> None:
    """get raises KeyError; find returns None."""
    sens = CurrencyParameterSensitivities.empty()
    assert sens.find("X", USD) is None
    with pytest.raises(KeyError):
        sens.get("X", USD)


def test_total_in_one_currency() -> None:
    """Total converts every entry before summing."""
    sens = CurrencyParameterSensitivities.of(_entry(), _entry(name="EUR-DSC", currency=EUR))
    assert sens.total(USD, FxMatrix({"EURUSD": 1.5})) == pytest.approx(6.0 + 9.0)


def test_collection_equal_with_tolerance() -> None:
    """Missing entries only match all-zero vectors."""
    sens = CurrencyParameterSensitivities.of(_entry())
    with_zero = sens.combined_with(_entry(name="Z", values=(0.0, 0.0, 0.0)))
    assert sens.equal_with_tolerance(with_zero, 1e-12)
    assert not sens.equal_with_tolerance(sens.multiplied_by(1.1), 1e-6)
    assert sens.equal_with_tolerance(sens.map_sensitivities(lambda v: v + 1e-9), 1e-6)


def test_to_frame() -> None:
    """One row per curve parameter."""
    sens = CurrencyParameterSensitivities.of(_entry(), _entry(name="B", currency=EUR))
    frame = sens.to_frame()
    assert list(frame.columns) == ["curve_name", "currency", "parameter_index", "parameter_key", "sensitivity"]
    assert len(frame) == 6
    usd_rows = frame[frame["currency"] == "USD"]
    assert usd_rows["sensitivity"].tolist() == [1.0, 2.0, 3.0]
    assert usd_rows["parameter_key"].tolist() == [0.5, 1.0, 2.0]


def test_empty_to_frame() -> None:
    """Empty collection renders an empty frame with the report columns."""
    frame = CurrencyParameterSensitivities.empty().to_frame()
    assert frame.empty
    assert "sensitivity" in frame.columns


def test_plus_rejects_different_parameter_keys() -> None:
    """Entries with the same name but different nodes never merge."""
    other_nodes = CurrencyParameterSensitivity("USD-DSC", USD, (1.0, 2.0, 5.0), (1.0, 1.0, 1.0))
    with pytest.raises(ValueError, match="different parameter keys"):
        _entry().plus(other_nodes)
    with pytest.raises(ValueError, match="different parameter keys"):
        CurrencyParameterSensitivities.of(_entry(), other_nodes)
