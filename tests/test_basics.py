"""Tests for currencies, legal-entity identifiers and FX rates."""

import pytest

from creditcurves.basics import EUR, USD, Currency, FxMatrix, FxRateProvider, StandardId
from creditcurves.errors import MissingFxRate


def test_currency_normalized() -> None:
    """Codes are upper-cased; invalid codes raise."""
    assert Currency.of(" usd ") == USD
    assert Currency.of(USD) is USD
    assert str(EUR) == "EUR"
    with pytest.raises(ValueError, match="Invalid currency code"):
        Currency("US")
    assert EUR < USD


def test_standard_id_parse() -> None:
    """scheme~value round trip."""
    entity = StandardId.parse("OG-Ticker~ACME")
    assert entity == StandardId.of("OG-Ticker", "ACME")
    assert str(entity) == "OG-Ticker~ACME"
    with pytest.raises(ValueError, match="scheme~value"):
        StandardId.parse("ACME")
    with pytest.raises(ValueError, match="must not be empty"):
        StandardId("", "ACME")


def test_fx_matrix_rates() -> None:
    """Direct, inverse and identity rates."""
    fx = FxMatrix({"EUR/USD": 1.25})
    assert fx.fx_rate(EUR, USD) == 1.25
    assert fx.fx_rate("USD", "EUR") == pytest.approx(0.8)
    assert fx.fx_rate("JPY", "JPY") == 1.0
    assert isinstance(fx, FxRateProvider)


def test_fx_matrix_missing_pair() -> None:
    """Unknown pairs raise MissingFxRate, a KeyError."""
    fx = FxMatrix.of("EUR", "USD", 1.1)
    with pytest.raises(MissingFxRate, match="GBP/USD"):
        fx.fx_rate("GBP", "USD")
    with pytest.raises(KeyError):
        fx.fx_rate("USD", "GBP")


def test_fx_matrix_with_rate() -> None:
    """with_rate returns a new matrix."""
    fx = FxMatrix.of("EUR", "USD", 1.1)
    updated = fx.with_rate("GBP", "USD", 1.3)
    assert updated.fx_rate("GBP", "USD") == 1.3
    assert "GBPUSD" not in fx.pairs
    with pytest.raises(ValueError, match="must be positive"):
        FxMatrix({"EURUSD": 0.0})
    with pytest.raises(ValueError, match="six letters"):
        FxMatrix({"EURUS": 1.0})
