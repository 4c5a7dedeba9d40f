"""
Black-Scholes option pricing model with continuous dividend yield.

This module implements the classical Black-Scholes-Merton formula for
European options together with its first and second order sensitivities.
Every function is a pure function of an OptionParameters value.

The kernel does not re-validate its inputs: OptionParameters checks them
once at construction. At the boundary (zero volatility or zero time to
expiry) the formulas follow floating point semantics, so d1/d2 become
±inf, or NaN when the option is exactly at the forward, and the caller
sees the resulting value rather than an exception.

References:
    Black, F., & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Journal of Political Economy, 81(3), 637-654.
"""

import math
from typing import Callable

from ivol.core.distributions import normal_cdf, normal_pdf
from ivol.utils.constants import PERCENT
from ivol.utils.types import Greeks, OptionParameters, OptionType


def _sign(option_type: OptionType) -> float:
    """+1 for calls, -1 for puts."""
    if option_type == "call":
        return 1.0
    elif option_type == "put":
        return -1.0
    else:
        raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")


def _diffusion(params: OptionParameters) -> float:
    return params.volatility * math.sqrt(params.time_to_expiry)


def discounted_spot(params: OptionParameters) -> float:
    """S·e^(-qT)"""
    return params.spot_price * math.exp(-params.dividend_yield * params.time_to_expiry)


def discounted_strike(params: OptionParameters) -> float:
    """K·e^(-rT)"""
    return params.strike * math.exp(-params.risk_free_rate * params.time_to_expiry)


def d1(params: OptionParameters) -> float:
    """
    Calculate d1 parameter in Black-Scholes formula.

    Formula:
        d1 = [ln(S/K) + (r - q + σ²/2)T] / (σ√T)

    Notes:
        Uses log(S) - log(K) to prevent overflow for extreme S/K.
        A zero denominator yields ±inf (NaN for a zero numerator),
        the IEEE result of the division.
    """
    log_moneyness = math.log(params.spot_price) - math.log(params.strike)
    drift = (
        params.risk_free_rate
        - params.dividend_yield
        + 0.5 * params.volatility * params.volatility
    ) * params.time_to_expiry
    numerator = log_moneyness + drift
    diffusion = _diffusion(params)

    if diffusion == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)

    return numerator / diffusion


def d2(params: OptionParameters) -> float:
    """
    Calculate d2 parameter in Black-Scholes formula.

    Formula:
        d2 = d1 - σ√T

    Notes:
        For a call, N(d2) is the risk-neutral probability of exercise.
    """
    return d1(params) - _diffusion(params)


def premium(params: OptionParameters, option_type: OptionType = "call") -> float:
    """
    Calculate European option premium (call or put).

    Formulas:
        C = S·e^(-qT)·N(d1) - K·e^(-rT)·N(d2)
        P = K·e^(-rT)·N(-d2) - S·e^(-qT)·N(-d1)

    Raises:
        ValueError: If option_type is not "call" or "put"

    Examples:
        >>> params = OptionParameters(100.0, 100.0, 0.05, 1.0, volatility=0.20)
        >>> abs(premium(params, "call") - 10.4506) < 0.001
        True
    """
    sign = _sign(option_type)
    d1_value = d1(params)
    d2_value = d1_value - _diffusion(params)

    return sign * (
        discounted_spot(params) * normal_cdf(sign * d1_value)
        - discounted_strike(params) * normal_cdf(sign * d2_value)
    )


def call_premium(params: OptionParameters) -> float:
    """European call premium."""
    return premium(params, "call")


def put_premium(params: OptionParameters) -> float:
    """European put premium."""
    return premium(params, "put")


def parity_price(
    market_price: float, params: OptionParameters, option_type: OptionType = "call"
) -> float:
    """
    Convert an option price into the counterpart price via put-call parity.

    Given a call price, returns the put price with the same strike and
    expiry; given a put price, returns the call price.

    Formula:
        C - P = S·e^(-qT) - K·e^(-rT)
    """
    sign = _sign(option_type)
    return market_price - sign * (discounted_spot(params) - discounted_strike(params))


# ===========================
# Greeks Calculations
# ===========================


def delta(params: OptionParameters, option_type: OptionType = "call") -> float:
    """
    Calculate option delta (∂V/∂S).

    Formulas:
        Call delta: Δ_c = e^(-qT) · N(d1)
        Put delta:  Δ_p = -e^(-qT) · N(-d1)
    """
    sign = _sign(option_type)
    dividend_discount = math.exp(-params.dividend_yield * params.time_to_expiry)
    return sign * dividend_discount * normal_cdf(sign * d1(params))


def gamma(params: OptionParameters) -> float:
    """
    Calculate option gamma (∂²V/∂S²), same for calls and puts.

    Formula:
        Γ = e^(-qT) · φ(d1) / (S · σ · √T)

    Gamma → 0 as σ√T → 0 (delta becomes a step function).
    """
    diffusion = _diffusion(params)
    if diffusion == 0.0:
        return 0.0

    dividend_discount = math.exp(-params.dividend_yield * params.time_to_expiry)
    return dividend_discount * normal_pdf(d1(params)) / (params.spot_price * diffusion)


def vega(params: OptionParameters) -> float:
    """
    Calculate option vega (∂V/∂σ), same for calls and puts.

    This is the derivative the implied volatility solver divides by, so it
    is reported per unit of volatility, not per 1% move.

    Formula:
        ν = S · e^(-qT) · φ(d1) · √T

    Notes:
        Vega is highest at the money and vanishes for deep in- or
        out-of-the-money options and near expiry.
    """
    return (
        discounted_spot(params)
        * normal_pdf(d1(params))
        * math.sqrt(params.time_to_expiry)
    )


def theta(params: OptionParameters, option_type: OptionType = "call") -> float:
    """
    Calculate option theta, annualized (-∂V/∂T).

    Formulas:
        Call theta:
            Θ_c = q·S·e^(-qT)·N(d1) - r·K·e^(-rT)·N(d2) - S·e^(-qT)·φ(d1)·σ/(2√T)

        Put theta:
            Θ_p = -q·S·e^(-qT)·N(-d1) + r·K·e^(-rT)·N(-d2) - S·e^(-qT)·φ(d1)·σ/(2√T)

    Notes:
        Divide by 365 for a per-day figure. At expiry theta is undefined
        and 0.0 is returned.
    """
    sign = _sign(option_type)
    if params.time_to_expiry == 0.0:
        return 0.0

    d1_value = d1(params)
    d2_value = d1_value - _diffusion(params)
    spot = discounted_spot(params)

    dividend_term = sign * params.dividend_yield * spot * normal_cdf(sign * d1_value)
    rate_term = sign * params.risk_free_rate * discounted_strike(params) * normal_cdf(sign * d2_value)
    diffusion_term = (
        spot * normal_pdf(d1_value) * params.volatility / (2.0 * math.sqrt(params.time_to_expiry))
    )

    return dividend_term - rate_term - diffusion_term


def rho(params: OptionParameters, option_type: OptionType = "call") -> float:
    """
    Calculate option rho, per 1% change in the risk-free rate.

    Formulas:
        Call rho: ρ_c = 0.01 · K·T·e^(-rT)·N(d2)
        Put rho:  ρ_p = -0.01 · K·T·e^(-rT)·N(-d2)
    """
    sign = _sign(option_type)
    rate_derivative = (
        sign
        * discounted_strike(params)
        * params.time_to_expiry
        * normal_cdf(sign * d2(params))
    )
    return PERCENT * rate_derivative


def phi(params: OptionParameters, option_type: OptionType = "call") -> float:
    """
    Calculate option phi (dividend yield risk), per 1% change in the yield.

    Formulas:
        Call phi: Φ_c = -0.01 · T·S·e^(-qT)·N(d1)
        Put phi:  Φ_p = 0.01 · T·S·e^(-qT)·N(-d1)
    """
    sign = _sign(option_type)
    dividend_derivative = (
        -sign
        * params.time_to_expiry
        * discounted_spot(params)
        * normal_cdf(sign * d1(params))
    )
    return PERCENT * dividend_derivative


def call_delta(params: OptionParameters) -> float:
    return delta(params, "call")


def put_delta(params: OptionParameters) -> float:
    return delta(params, "put")


def call_theta(params: OptionParameters) -> float:
    return theta(params, "call")


def put_theta(params: OptionParameters) -> float:
    return theta(params, "put")


def call_rho(params: OptionParameters) -> float:
    return rho(params, "call")


def put_rho(params: OptionParameters) -> float:
    return rho(params, "put")


def call_phi(params: OptionParameters) -> float:
    return phi(params, "call")


def put_phi(params: OptionParameters) -> float:
    return phi(params, "put")


call_gamma = put_gamma = gamma
call_vega = put_vega = vega


def calculate_greeks(params: OptionParameters, option_type: OptionType = "call") -> Greeks:
    """
    Calculate all Greeks for an option in one pass.

    Example:
        >>> params = OptionParameters(100.0, 100.0, 0.05, 1.0, volatility=0.20)
        >>> round(calculate_greeks(params).delta, 4)
        0.6368
    """
    return Greeks(
        delta=delta(params, option_type),
        gamma=gamma(params),
        vega=vega(params),
        theta=theta(params, option_type),
        rho=rho(params, option_type),
        phi=phi(params, option_type),
    )


# ===========================
# Scenario Analysis
# ===========================


def simulate(
    params: OptionParameters,
    bump: Callable[[OptionParameters], OptionParameters],
    option_type: OptionType = "call",
) -> float:
    """
    Premium change when the parameters are moved by a scenario function.

    Args:
        params: Original contract
        bump: Function building the scenario contract from the original
        option_type: "call" or "put"

    Returns:
        premium(bump(params)) - premium(params)

    Example:
        >>> from dataclasses import replace
        >>> params = OptionParameters(345.0, 330.0, 0.025, 1.0, 0.34, 0.06)
        >>> h = 1e-5
        >>> fd_delta = simulate(params, lambda p: replace(p, spot_price=p.spot_price + h)) / h
        >>> abs(fd_delta - call_delta(params)) < 1e-4
        True
    """
    return premium(bump(params), option_type) - premium(params, option_type)


def simulate_call(
    params: OptionParameters, bump: Callable[[OptionParameters], OptionParameters]
) -> float:
    return simulate(params, bump, "call")


def simulate_put(
    params: OptionParameters, bump: Callable[[OptionParameters], OptionParameters]
) -> float:
    return simulate(params, bump, "put")
