"""Unit tests for parameter validation and value semantics."""

import dataclasses
import math

import pytest

from ivol.utils.types import OptionParameters


@pytest.mark.parametrize(
    "field,value",
    [
        ("spot_price", -100.0),
        ("spot_price", 0.0),
        ("strike", -100.0),
        ("strike", math.nan),
        ("time_to_expiry", -1.0),
        ("volatility", -0.20),
        ("risk_free_rate", math.nan),
    ],
)
def test_invalid_parameters_raise(field, value):
    kwargs = dict(
        spot_price=100.0,
        strike=100.0,
        risk_free_rate=0.05,
        time_to_expiry=1.0,
        volatility=0.2,
    )
    kwargs[field] = value

    with pytest.raises(ValueError):
        OptionParameters(**kwargs)


def test_negative_rates_and_zero_time_are_allowed():
    params = OptionParameters(100.0, 100.0, -0.01, 0.0, dividend_yield=-0.02)
    assert params.volatility == 0.0


def test_parameters_are_immutable(standard_params):
    with pytest.raises(dataclasses.FrozenInstanceError):
        standard_params.volatility = 0.5


def test_with_volatility_returns_copy(standard_params):
    bumped = standard_params.with_volatility(0.35)

    assert bumped.volatility == 0.35
    assert standard_params.volatility == 0.20
    assert bumped.spot_price == standard_params.spot_price
