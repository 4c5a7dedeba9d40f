"""
Implied volatility solver for European options.

This module provides the high-level interface for solving implied
volatility: it rejects premiums the model cannot reproduce, seeds the
iteration with a closed-form approximation and runs Newton-Raphson.
All outcomes, including rejected inputs, come back as ImpliedVolResult.
"""

import logging
import math
from typing import Optional

from ivol.core.black_scholes import discounted_spot, discounted_strike, parity_price
from ivol.diagnostics.arbitrage import premium_bounds
from ivol.solvers.newton_raphson import newton_raphson_iv
from ivol.utils.constants import (
    IV_INITIAL_GUESS,
    IV_MAX_INITIAL_GUESS,
    IV_MAX_ITERATIONS,
    IV_MIN_VEGA,
    IV_MIN_VOL,
    IV_PRICE_TOLERANCE,
)
from ivol.utils.types import ImpliedVolResult, OptionParameters, OptionType

logger = logging.getLogger(__name__)


def brenner_subrahmanyam_approximation(market_price: float, params: OptionParameters) -> float:
    """
    Brenner-Subrahmanyam approximation for ATM implied volatility.

    Formula (for ATM):
        σ ≈ √(2π/T) × (C/S)

    Reference:
        Brenner, M., & Subrahmanyam, M. G. (1988). A Simple Formula to
        Compute the Implied Standard Deviation. Financial Analysts Journal, 44(5), 80-83.

    Notes:
        - Most accurate for ATM options (S ≈ K)
        - Clamped to [1%, 500%]
    """
    T = params.time_to_expiry
    if T <= 0 or market_price <= 0:
        return IV_INITIAL_GUESS

    sigma_guess = math.sqrt(2.0 * math.pi / T) * (market_price / params.spot_price)
    return max(0.01, min(sigma_guess, IV_MAX_INITIAL_GUESS))


def corrado_miller_approximation(call_price: float, params: OptionParameters) -> float:
    """
    Corrado-Miller closed-form estimate of implied volatility from a call price.

    Formula:
        X = S·e^(-qT) - K·e^(-rT)
        σ ≈ √(2π) / (S·e^(-qT) + K·e^(-rT)) / √T
            × [C - X/2 + √((C - X/2)² - X²/π)]

    A negative term under the square root is replaced by zero. Returns
    NaN when T is zero.

    Reference:
        Corrado, C. J., & Miller, T. W. (1996). A note on a simple, accurate
        formula to compute implied standard deviations. Journal of Banking
        & Finance, 20(3), 595-603.
    """
    if params.time_to_expiry <= 0:
        return math.nan

    spot = discounted_spot(params)
    strike = discounted_strike(params)
    moneyness_gap = spot - strike
    adjusted_price = call_price - moneyness_gap / 2.0

    under_root = adjusted_price ** 2 - moneyness_gap ** 2 / math.pi
    root = math.sqrt(under_root) if under_root > 0.0 else 0.0

    scale = math.sqrt(2.0 * math.pi) / (spot + strike)
    return scale * (adjusted_price + root) / math.sqrt(params.time_to_expiry)


def get_initial_guess(
    market_price: float,
    params: OptionParameters,
    option_type: OptionType,
    min_volatility: float = IV_MIN_VOL,
) -> float:
    """
    Generate initial guess for implied volatility.

    Put prices are converted to the equivalent call price through put-call
    parity, then Corrado-Miller is tried. If it does not give a finite
    value above the volatility floor, Brenner-Subrahmanyam is used.

    Returns:
        Initial volatility estimate in a reasonable range
    """
    if option_type == "put":
        call_price = parity_price(market_price, params, "put")
    else:
        call_price = market_price

    guess = corrado_miller_approximation(call_price, params)
    if math.isfinite(guess) and guess > min_volatility:
        return min(guess, IV_MAX_INITIAL_GUESS)

    return brenner_subrahmanyam_approximation(call_price, params)


def premium_precondition(
    market_price: float, params: OptionParameters, option_type: OptionType
) -> Optional[str]:
    """
    Check that a premium can be reproduced by some positive volatility.

    Returns:
        None if the premium is admissible, otherwise a description of the
        violated condition

    Raises:
        ValueError: If option_type is not "call" or "put"
    """
    label = option_type.capitalize()
    lower_bound, upper_bound = premium_bounds(params, option_type)

    if not math.isfinite(market_price):
        return f"{label} price {market_price} is not a finite number"
    if market_price <= 0.0:
        return f"{label} price {market_price:.6f} must be positive"
    if market_price < lower_bound:
        return (
            f"{label} price {market_price:.6f} below lower bound {lower_bound:.6f} "
            f"(intrinsic value)"
        )
    if market_price >= upper_bound:
        return (
            f"{label} price {market_price:.6f} not below upper bound {upper_bound:.6f} "
            f"(reached only as volatility → ∞)"
        )
    return None


def implied_volatility(
    market_price: float,
    params: OptionParameters,
    option_type: OptionType = "call",
    initial_guess: Optional[float] = None,
    max_iterations: int = IV_MAX_ITERATIONS,
    price_tolerance: float = IV_PRICE_TOLERANCE,
    min_vega: float = IV_MIN_VEGA,
    min_volatility: float = IV_MIN_VOL,
) -> ImpliedVolResult:
    """
    Solve for implied volatility.

    This is the main entry point for implied volatility calculation:
    1. Rejects premiums outside the model's reachable range
    2. Generates an initial guess (if not provided)
    3. Runs Newton-Raphson until the premium error is below price_tolerance

    Args:
        market_price: Observed market premium
        params: Contract parameters; the volatility field is ignored
        option_type: "call" or "put"
        initial_guess: Starting volatility (auto-generated if None)
        max_iterations, price_tolerance, min_vega, min_volatility:
            Newton-Raphson settings, see newton_raphson_iv

    Returns:
        ImpliedVolResult. Rejected premiums come back with
        failure="precondition-violation" and zero iterations.

    Examples:
        >>> params = OptionParameters(100.0, 100.0, 0.05, 1.0)
        >>> result = implied_volatility(10.4506, params, "call")
        >>> result.success, round(result.volatility, 4)
        (True, 0.2)
    """
    violation = premium_precondition(market_price, params, option_type)
    if violation:
        logger.debug("Implied volatility precondition violated: %s", violation)
        return ImpliedVolResult(
            success=False,
            volatility=None,
            iterations=0,
            failure="precondition-violation",
            message=violation,
        )

    if initial_guess is None:
        initial_guess = get_initial_guess(market_price, params, option_type, min_volatility)

    return newton_raphson_iv(
        market_price,
        params,
        option_type,
        initial_guess,
        max_iterations=max_iterations,
        price_tolerance=price_tolerance,
        min_vega=min_vega,
        min_volatility=min_volatility,
    )


def call_impl_vol(call_market_price: float, params: OptionParameters) -> ImpliedVolResult:
    """Implied volatility from a call premium."""
    return implied_volatility(call_market_price, params, "call")


def put_impl_vol(put_market_price: float, params: OptionParameters) -> ImpliedVolResult:
    """Implied volatility from a put premium."""
    return implied_volatility(put_market_price, params, "put")
