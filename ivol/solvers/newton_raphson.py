"""
Newton-Raphson method for implied volatility calculation.

This module implements the Newton-Raphson algorithm for solving
the Black-Scholes equation for volatility given a market premium.
The method uses vega (∂V/∂σ) as the derivative for fast convergence.

There is no bracketing fallback. Inputs on which the Newton step is not
safe are reported as failures instead of being handed to a slower method.
"""

import logging
import math
from typing import Optional

from ivol.core.black_scholes import premium, vega
from ivol.utils.constants import (
    IV_MAX_ITERATIONS,
    IV_MIN_VEGA,
    IV_MIN_VOL,
    IV_PRICE_TOLERANCE,
)
from ivol.utils.types import FailureReason, ImpliedVolResult, OptionParameters, OptionType

logger = logging.getLogger(__name__)


def _failed(
    reason: FailureReason, iterations: int, residual: Optional[float], message: str
) -> ImpliedVolResult:
    logger.debug("Implied volatility failed (%s): %s", reason, message)
    return ImpliedVolResult(
        success=False,
        volatility=None,
        iterations=iterations,
        residual=residual,
        failure=reason,
        message=message,
    )


def newton_raphson_iv(
    target_premium: float,
    params: OptionParameters,
    option_type: OptionType,
    initial_guess: float,
    max_iterations: int = IV_MAX_ITERATIONS,
    price_tolerance: float = IV_PRICE_TOLERANCE,
    min_vega: float = IV_MIN_VEGA,
    min_volatility: float = IV_MIN_VOL,
) -> ImpliedVolResult:
    """
    Solve for implied volatility using Newton-Raphson method.

    The Newton-Raphson update is:
        σ_{n+1} = max(σ_n - (BS(σ_n) - target) / vega(σ_n), σ_min)

    Args:
        target_premium: Observed market premium
        params: Contract parameters; the volatility field is ignored
        option_type: "call" or "put"
        initial_guess: Starting volatility estimate
        max_iterations: Maximum number of premium evaluations
        price_tolerance: Absolute premium error accepted as converged
        min_vega: Smallest vega the update is allowed to divide by
        min_volatility: Floor applied to every volatility guess

    Returns:
        ImpliedVolResult. On failure `failure` is one of:
            - "numerical-instability": premium, vega, residual or the next
              guess is not finite
            - "degenerate-vega": vega fell below min_vega
            - "max-iterations-exceeded": no convergence within the budget

    Notes:
        Each call is independent; no state survives between calls.
    """
    if not math.isfinite(initial_guess):
        return _failed(
            "numerical-instability", 0, None, f"Initial guess is not finite ({initial_guess})"
        )

    sigma = max(initial_guess, min_volatility)
    residual = None

    for iteration in range(1, max_iterations + 1):
        trial = params.with_volatility(sigma)
        model_premium = premium(trial, option_type)
        vega_value = vega(trial)
        residual = model_premium - target_premium

        if not (
            math.isfinite(model_premium)
            and math.isfinite(vega_value)
            and math.isfinite(residual)
        ):
            return _failed(
                "numerical-instability",
                iteration,
                residual,
                f"Non-finite value at iteration {iteration} "
                f"(σ={sigma:.6g}, premium={model_premium}, vega={vega_value})",
            )

        if abs(residual) < price_tolerance:
            logger.debug(
                "Implied volatility converged to %.10f in %d iterations (residual %.2e)",
                sigma,
                iteration,
                residual,
            )
            return ImpliedVolResult(
                success=True,
                volatility=sigma,
                iterations=iteration,
                residual=residual,
                message=f"Converged in {iteration} iterations",
            )

        if vega_value < min_vega:
            return _failed(
                "degenerate-vega",
                iteration,
                residual,
                f"Vega too small ({vega_value:.2e}) at iteration {iteration}",
            )

        sigma_new = sigma - residual / vega_value
        if not math.isfinite(sigma_new):
            return _failed(
                "numerical-instability",
                iteration,
                residual,
                f"Newton step produced σ={sigma_new} at iteration {iteration}",
            )

        # Volatility below zero is not meaningful and the kernel is undefined there
        sigma = max(sigma_new, min_volatility)

    return _failed(
        "max-iterations-exceeded",
        max_iterations,
        residual,
        f"Max iterations ({max_iterations}) reached without convergence",
    )
