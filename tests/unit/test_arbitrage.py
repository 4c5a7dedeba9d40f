"""Unit tests for arbitrage diagnostics."""

import math

import pytest

from ivol.core.black_scholes import call_premium, put_premium
from ivol.diagnostics.arbitrage import (
    check_premium_bounds,
    check_put_call_parity,
    premium_bounds,
)


def test_premium_bounds_call(itm_call_params):
    lower, upper = premium_bounds(itm_call_params, "call")

    assert abs(lower - (110.0 - 100.0 * math.exp(-0.05))) < 1e-12
    assert upper == 110.0


def test_premium_bounds_put(itm_call_params):
    lower, upper = premium_bounds(itm_call_params, "put")

    assert lower == 0.0
    assert abs(upper - 100.0 * math.exp(-0.05)) < 1e-12


def test_premium_bounds_invalid_type(standard_params):
    with pytest.raises(ValueError):
        premium_bounds(standard_params, "binary")


def test_model_premiums_within_bounds(with_dividend_params):
    for option_type, price in (
        ("call", call_premium(with_dividend_params)),
        ("put", put_premium(with_dividend_params)),
    ):
        result = check_premium_bounds(price, with_dividend_params, option_type)
        assert result.is_valid
        assert result.violations == []


def test_call_below_intrinsic_flagged(itm_call_params):
    result = check_premium_bounds(3.0, itm_call_params, "call")

    assert not result.is_valid
    assert "below lower bound" in result.violations[0]
    assert result.details["lower_bound_ok"] == 0.0


def test_put_above_strike_flagged(standard_params):
    result = check_premium_bounds(100.0, standard_params, "put")

    assert not result.is_valid
    assert "above upper bound" in result.violations[0]


def test_put_call_parity_valid(standard_params):
    """Model prices satisfy put-call parity."""
    result = check_put_call_parity(
        call_premium(standard_params), put_premium(standard_params), standard_params
    )
    assert result.is_valid
    assert result.details["difference"] < 1e-10


def test_put_call_parity_violation(standard_params):
    result = check_put_call_parity(10.0, 10.0, standard_params)

    assert not result.is_valid
    assert "Put-call parity violated" in result.violations[0]
