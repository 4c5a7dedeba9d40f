"""
Arbitrage diagnostics for single-contract option premiums.

This module implements the no-arbitrage checks the implied volatility
solver relies on before iterating:
- Model premium bounds
- Put-call parity
"""

from ivol.core.black_scholes import discounted_spot, discounted_strike
from ivol.utils.constants import ARBITRAGE_TOLERANCE, PARITY_TOLERANCE
from ivol.utils.types import ArbitrageCheck, OptionParameters, OptionType


def premium_bounds(params: OptionParameters, option_type: OptionType) -> tuple[float, float]:
    """
    Range of premiums reachable by the Black-Scholes model.

    Bounds:
        Call: max(S·e^(-qT) - K·e^(-rT), 0) <= C <= S·e^(-qT)
        Put:  max(K·e^(-rT) - S·e^(-qT), 0) <= P <= K·e^(-rT)

    The lower bound is the σ → 0 limit and the upper bound the σ → ∞
    limit; neither is attained by a finite positive volatility.

    Raises:
        ValueError: If option_type is not "call" or "put"
    """
    spot = discounted_spot(params)
    strike = discounted_strike(params)

    if option_type == "call":
        return max(spot - strike, 0.0), spot
    elif option_type == "put":
        return max(strike - spot, 0.0), strike
    else:
        raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")


def check_premium_bounds(
    premium: float,
    params: OptionParameters,
    option_type: OptionType,
    tolerance: float = ARBITRAGE_TOLERANCE,
) -> ArbitrageCheck:
    """
    Validate an observed premium against the no-arbitrage bounds.

    Args:
        premium: Observed option premium
        params: Contract parameters (volatility is not used)
        option_type: "call" or "put"
        tolerance: Tolerance for floating point comparisons

    Returns:
        ArbitrageCheck with validation results
    """
    lower, upper = premium_bounds(params, option_type)
    label = option_type.capitalize()
    violations = []

    lower_ok = premium >= lower - tolerance
    if not lower_ok:
        violations.append(f"{label} price {premium:.4f} below lower bound {lower:.4f}")

    upper_ok = premium <= upper + tolerance
    if not upper_ok:
        violations.append(f"{label} price {premium:.4f} above upper bound {upper:.4f}")

    details = {
        "lower_bound": lower,
        "upper_bound": upper,
        "lower_bound_ok": float(lower_ok),
        "upper_bound_ok": float(upper_ok),
    }
    return ArbitrageCheck(is_valid=not violations, violations=violations, details=details)


def check_put_call_parity(
    call_price: float,
    put_price: float,
    params: OptionParameters,
    tolerance: float = PARITY_TOLERANCE,
) -> ArbitrageCheck:
    """
    Validate put-call parity relationship.

    Put-call parity:
        C - P = S·e^(-qT) - K·e^(-rT)
    """
    lhs = call_price - put_price
    rhs = discounted_spot(params) - discounted_strike(params)

    diff = abs(lhs - rhs)
    is_valid = diff < tolerance

    violations = []
    if not is_valid:
        violations.append(
            f"Put-call parity violated: C - P = {lhs:.6f}, "
            f"S·e^(-qT) - K·e^(-rT) = {rhs:.6f}, diff = {diff:.6f}"
        )

    details = {"parity_lhs": lhs, "parity_rhs": rhs, "difference": diff}

    return ArbitrageCheck(is_valid=is_valid, violations=violations, details=details)
