"""Shared fixtures for the credit curve tests."""

from datetime import date

import pytest

from creditcurves.basics import StandardId
from creditcurves.config import reset_default_config
from creditcurves.curves import (
    DiscountFactorCreditDiscountFactors,
    FlatCreditDiscountFactors,
    ZeroRateCreditDiscountFactors,
)

VALUATION_DATE = date(2024, 1, 15)
ACME = StandardId("OG-Ticker", "ACME")


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the built-in defaults."""
    reset_default_config()
    yield
    reset_default_config()


@pytest.fixture
def valuation_date() -> date:
    return VALUATION_DATE


@pytest.fixture
def acme() -> StandardId:
    return ACME


def make_curves():
    """One curve per implementation, all in USD."""
    times = [0.5, 1.0, 2.0, 5.0]
    rates = [0.02, 0.025, 0.03, 0.035]
    dfs = [0.99, 0.975, 0.94, 0.84]
    return {
        "flat": FlatCreditDiscountFactors("USD", VALUATION_DATE, 0.03),
        "linear": ZeroRateCreditDiscountFactors("USD", VALUATION_DATE, times, rates),
        "product_linear": ZeroRateCreditDiscountFactors(
            "USD", VALUATION_DATE, times, rates, interpolation_method="PRODUCT_LINEAR"
        ),
        "discount_factor": DiscountFactorCreditDiscountFactors("USD", VALUATION_DATE, times, dfs),
    }


@pytest.fixture(params=["flat", "linear", "product_linear", "discount_factor"])
def any_curve(request):
    return make_curves()[request.param]


@pytest.fixture
def usd_curve() -> ZeroRateCreditDiscountFactors:
    return ZeroRateCreditDiscountFactors(
        "USD", VALUATION_DATE, [0.5, 1.0, 2.0], [0.02, 0.025, 0.03], name="USD-DSC"
    )
