"""
Standard normal distribution primitives.

Pricing and vega both go through these two functions so that vega stays
the exact derivative of the premium the solver is inverting.
"""

import math
from scipy.stats import norm

from ivol.utils.constants import MAX_PDF_STANDARD_DEVIATIONS, MAX_STANDARD_DEVIATIONS

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def normal_cdf(x: float) -> float:
    """
    Standard normal cumulative distribution function with tail clamping.

    For |x| > 8 the CDF is 0 or 1 to double precision. NaN propagates,
    ±inf maps to the limits.

    Examples:
        >>> normal_cdf(0.0)
        0.5
        >>> normal_cdf(10.0)
        1.0
    """
    if x > MAX_STANDARD_DEVIATIONS:
        return 1.0
    if x < -MAX_STANDARD_DEVIATIONS:
        return 0.0

    return float(norm.cdf(x))


def normal_pdf(x: float) -> float:
    """
    Standard normal probability density function.

    φ(x) = (1/√(2π)) * exp(-x²/2), taken as zero for |x| > 10.

    Examples:
        >>> normal_pdf(15.0)
        0.0
    """
    if abs(x) > MAX_PDF_STANDARD_DEVIATIONS:
        return 0.0

    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)
