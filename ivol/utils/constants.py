"""
Numerical constants and tolerances for option analytics.

Thresholds for the normal distribution tails, the implied volatility
solver and the arbitrage diagnostics.
"""

# Normal distribution bounds
MAX_STANDARD_DEVIATIONS = 8.0  # Beyond ±8σ, CDF is effectively 0 or 1
MAX_PDF_STANDARD_DEVIATIONS = 10.0  # Beyond ±10σ, PDF is below 2e-22

# Greeks scaling
PERCENT = 0.01  # rho and phi are quoted per 1% move

# Implied volatility solver parameters
IV_PRICE_TOLERANCE = 1e-8  # Absolute premium error for convergence
IV_MAX_ITERATIONS = 100  # Maximum Newton-Raphson iterations
IV_MIN_VEGA = 1e-10  # Below this, the Newton step is not taken
IV_MIN_VOL = 1e-6  # Floor for volatility guesses
IV_INITIAL_GUESS = 0.2  # Default 20% volatility if no better guess
IV_MAX_INITIAL_GUESS = 5.0  # Cap for closed-form seeds

# Arbitrage diagnostics tolerances
ARBITRAGE_TOLERANCE = 1e-4  # $0.0001 tolerance for bounds checks
PARITY_TOLERANCE = 1e-6  # Put-call parity tolerance
