"""
Pytest configuration and shared fixtures.
"""

import pytest

from ivol.utils.types import OptionParameters


@pytest.fixture
def standard_params():
    """Standard at-the-money option parameters."""
    return OptionParameters(
        spot_price=100.0,
        strike=100.0,
        risk_free_rate=0.05,
        time_to_expiry=1.0,
        volatility=0.20,
        dividend_yield=0.0,
    )


@pytest.fixture
def itm_call_params():
    """In-the-money call parameters."""
    return OptionParameters(
        spot_price=110.0,
        strike=100.0,
        risk_free_rate=0.05,
        time_to_expiry=1.0,
        volatility=0.20,
        dividend_yield=0.0,
    )


@pytest.fixture
def with_dividend_params():
    """Parameters with non-zero dividend yield."""
    return OptionParameters(
        spot_price=100.0,
        strike=100.0,
        risk_free_rate=0.05,
        time_to_expiry=1.0,
        volatility=0.20,
        dividend_yield=0.02,
    )


@pytest.fixture
def index_params():
    """Index option with dividend yield above the risk-free rate."""
    return OptionParameters(
        spot_price=4792.0,
        strike=4400.0,
        risk_free_rate=0.025,
        time_to_expiry=0.5,
        volatility=0.23,
        dividend_yield=0.04,
    )
