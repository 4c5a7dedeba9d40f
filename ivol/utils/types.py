"""
Data types and structures for option analytics.

This module defines the immutable parameter set shared by the pricing
kernel and the implied volatility solver, together with the containers
returned by Greeks calculations, the solver and arbitrage diagnostics.
"""

import math
from dataclasses import dataclass, replace
from typing import Literal, Optional

OptionType = Literal["call", "put"]

FailureReason = Literal[
    "precondition-violation",
    "degenerate-vega",
    "max-iterations-exceeded",
    "numerical-instability",
]


@dataclass(frozen=True)
class OptionParameters:
    """
    Immutable Black-Scholes parameter set.

    Attributes:
        spot_price: Current price of the underlying asset
        strike: Strike price
        risk_free_rate: Risk-free interest rate (annualized, continuous compounding)
        time_to_expiry: Time to expiration in years
        volatility: Annualized volatility (ignored by the implied volatility solver)
        dividend_yield: Continuous dividend yield (annualized)

    Notes:
        Construction is the only validation point. Kernel functions trust
        the values they receive and follow floating point behaviour at the
        boundaries (e.g. zero time or zero volatility).
    """
    spot_price: float
    strike: float
    risk_free_rate: float
    time_to_expiry: float
    volatility: float = 0.0
    dividend_yield: float = 0.0

    def __post_init__(self) -> None:
        """Validate parameters are positive where required."""
        if not self.spot_price > 0:
            raise ValueError(f"Spot price must be positive, got spot_price={self.spot_price}")
        if not self.strike > 0:
            raise ValueError(f"Strike price must be positive, got strike={self.strike}")
        if not self.time_to_expiry >= 0:
            raise ValueError(
                f"Time to expiration must be non-negative, got time_to_expiry={self.time_to_expiry}"
            )
        if not self.volatility >= 0:
            raise ValueError(f"Volatility cannot be negative, got volatility={self.volatility}")
        if math.isnan(self.risk_free_rate) or math.isnan(self.dividend_yield):
            raise ValueError("Rate and dividend yield must be numbers, got NaN")

    def with_volatility(self, volatility: float) -> "OptionParameters":
        """Return a copy of these parameters with the volatility replaced."""
        return replace(self, volatility=volatility)


@dataclass
class Greeks:
    """
    Container for option Greeks.

    Attributes:
        delta: ∂V/∂S
        gamma: ∂²V/∂S²
        vega: ∂V/∂σ (per unit of volatility)
        theta: Annualized time decay, -∂V/∂T
        rho: Change in value per 1% change in the risk-free rate
        phi: Change in value per 1% change in the dividend yield
    """
    delta: float
    gamma: float
    vega: float
    theta: float
    rho: float
    phi: float


@dataclass(frozen=True)
class ImpliedVolResult:
    """
    Result from the implied volatility solver.

    Convergence is binary: a failed result never carries a volatility.

    Attributes:
        success: Whether the solver converged
        volatility: Solved implied volatility (annualized), None on failure
        iterations: Number of premium evaluations performed
        residual: Signed premium error (model - target) at the last evaluated
            volatility, None if no premium was evaluated
        failure: Reason for failure, None on success
        message: Additional information about convergence
    """
    success: bool
    volatility: Optional[float]
    iterations: int
    residual: Optional[float] = None
    failure: Optional[FailureReason] = None
    message: str = ""


@dataclass
class ArbitrageCheck:
    """
    Result from arbitrage validation.

    Attributes:
        is_valid: Whether the price satisfies no-arbitrage conditions
        violations: List of specific violations detected
        details: Dictionary with detailed check results
    """
    is_valid: bool
    violations: list[str]
    details: dict[str, float]
