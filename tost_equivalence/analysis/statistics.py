"""
Statistical building blocks for two-sample comparisons.

Provides confidence intervals, standard errors of a mean difference
(pooled and Welch), and standardized effect sizes.
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple, Dict, Any
from scipy import stats

from ..errors import InvalidInputError, NumericalError


@dataclass(frozen=True)
class ConfidenceInterval:
    """Confidence interval result."""
    lower: float
    upper: float
    point_estimate: float
    confidence_level: float
    method: str

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def margin_of_error(self) -> float:
        return self.width / 2

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lower, self.upper)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lower": self.lower,
            "upper": self.upper,
            "point_estimate": self.point_estimate,
            "confidence_level": self.confidence_level,
            "method": self.method,
            "width": self.width,
        }


def pooled_standard_deviation(sd1: float, n1: int, sd2: float, n2: int) -> float:
    """Pooled standard deviation of two independent samples."""
    pooled_var = ((n1 - 1) * sd1**2 + (n2 - 1) * sd2**2) / (n1 + n2 - 2)
    return float(np.sqrt(pooled_var))


def mean_difference_standard_error(
    sd1: float,
    n1: int,
    sd2: float,
    n2: int,
    equal_variance: bool = True,
) -> Tuple[float, float]:
    """
    Standard error of (mean1 - mean2) and its degrees of freedom.

    Args:
        sd1, sd2: Sample standard deviations
        n1, n2: Sample sizes
        equal_variance: Pooled variance if True, Welch-Satterthwaite otherwise

    Returns:
        (standard_error, degrees_of_freedom)
    """
    if equal_variance:
        sp = pooled_standard_deviation(sd1, n1, sd2, n2)
        se = sp * np.sqrt(1 / n1 + 1 / n2)
        df = n1 + n2 - 2
    else:
        v1 = sd1**2 / n1
        v2 = sd2**2 / n2
        se = np.sqrt(v1 + v2)
        denominator = v1**2 / (n1 - 1) + v2**2 / (n2 - 1)
        df = (v1 + v2) ** 2 / denominator if denominator > 0 else np.nan

    se = float(se)
    if not np.isfinite(se) or se <= 0:
        raise NumericalError(f"Standard error of the mean difference is degenerate: {se}")
    if not np.isfinite(df) or df <= 0:
        raise NumericalError(f"Degrees of freedom are degenerate: {df}")

    return se, df


def t_interval(
    estimate: float,
    standard_error: float,
    df: float,
    confidence_level: float,
    method: str = "t_interval",
) -> ConfidenceInterval:
    """Two-sided t-based interval around an estimate."""
    if not 0 < confidence_level < 1:
        raise InvalidInputError(f"confidence_level must be in (0, 1), got {confidence_level}")
    t_crit = stats.t.ppf((1 + confidence_level) / 2, df)
    if not np.isfinite(t_crit):
        raise NumericalError(
            f"Critical t value is not finite (df={df}, level={confidence_level})"
        )
    margin = t_crit * standard_error
    return ConfidenceInterval(
        lower=float(estimate - margin),
        upper=float(estimate + margin),
        point_estimate=float(estimate),
        confidence_level=confidence_level,
        method=method,
    )


def cohens_d(
    mean1: float,
    sd1: float,
    n1: int,
    mean2: float,
    sd2: float,
    n2: int,
) -> float:
    """Cohen's d using the pooled standard deviation."""
    pooled_std = pooled_standard_deviation(sd1, n1, sd2, n2)
    return (mean1 - mean2) / pooled_std if pooled_std > 0 else float("nan")
