"""
Two one-sided tests (TOST) for equivalence of two independent means.

The equivalence test asks whether the raw mean difference lies inside
a pair of bounds chosen before looking at the data. It is run next to
the conventional two-sided t-test, and the two outcomes together
classify the observed effect.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Sequence, Union

import numpy as np
from scipy import stats

from ..data.summaries import SampleSummary
from ..errors import InvalidInputError, NumericalError
from .statistics import (
    ConfidenceInterval,
    cohens_d,
    mean_difference_standard_error,
    pooled_standard_deviation,
    t_interval,
)


logger = logging.getLogger(__name__)


class EquivalenceConclusion(Enum):
    """Joint outcome of the equivalence test and the two-sided t-test."""
    EQUIVALENT_AND_DIFFERENT = "equivalent_and_different"
    EQUIVALENT = "equivalent"
    DIFFERENT_NOT_EQUIVALENT = "different_not_equivalent"
    UNDETERMINED = "undetermined"

    @property
    def description(self) -> str:
        return _CONCLUSION_TEXT[self]

    @classmethod
    def classify(cls, equivalent: bool, different: bool) -> "EquivalenceConclusion":
        if equivalent and different:
            return cls.EQUIVALENT_AND_DIFFERENT
        if equivalent:
            return cls.EQUIVALENT
        if different:
            return cls.DIFFERENT_NOT_EQUIVALENT
        return cls.UNDETERMINED


_CONCLUSION_TEXT = {
    EquivalenceConclusion.EQUIVALENT_AND_DIFFERENT: "equivalent and statistically different",
    EquivalenceConclusion.EQUIVALENT: "statistically equivalent to zero",
    EquivalenceConclusion.DIFFERENT_NOT_EQUIVALENT: "different and not equivalent",
    EquivalenceConclusion.UNDETERMINED: "undetermined / underpowered",
}


@dataclass(frozen=True)
class EquivalenceBounds:
    """Lower and upper equivalence bounds on the raw measurement scale."""
    low: float
    high: float

    def __post_init__(self):
        if not (_is_finite_number(self.low) and _is_finite_number(self.high)):
            raise InvalidInputError(f"Equivalence bounds must be finite: ({self.low}, {self.high})")
        if not self.low < self.high:
            raise InvalidInputError(
                f"Lower bound must be below upper bound: ({self.low}, {self.high})"
            )

    @property
    def width(self) -> float:
        return self.high - self.low

    def contains(self, value: float) -> bool:
        return self.low < value < self.high

    def negated(self) -> "EquivalenceBounds":
        """Bounds for the reversed difference (group 2 minus group 1)."""
        return EquivalenceBounds(low=-self.high, high=-self.low)

    def to_dict(self) -> Dict[str, float]:
        return {"low": self.low, "high": self.high}


@dataclass(frozen=True)
class EquivalenceTestResult:
    """Result of a raw-score TOST plus the matching two-sided t-test."""
    t_lower: float
    p_lower: float
    t_upper: float
    p_upper: float
    degrees_of_freedom: float
    tost_ci: ConfidenceInterval
    nhst_ci: ConfidenceInterval
    nhst_t: float
    nhst_p: float
    conclusion: EquivalenceConclusion
    mean_difference: float
    standard_error: float
    bounds: EquivalenceBounds
    alpha: float
    equal_variance: bool
    cohens_d: float

    @property
    def tost_p(self) -> float:
        return max(self.p_lower, self.p_upper)

    @property
    def equivalence_significant(self) -> bool:
        return self.p_lower < self.alpha and self.p_upper < self.alpha

    @property
    def nhst_significant(self) -> bool:
        return self.nhst_p < self.alpha

    @property
    def tost_t(self) -> float:
        """The one-sided statistic with the larger p-value."""
        return self.t_lower if self.p_lower >= self.p_upper else self.t_upper

    def to_dict(self) -> Dict[str, Any]:
        return {
            "t_lower": self.t_lower,
            "p_lower": self.p_lower,
            "t_upper": self.t_upper,
            "p_upper": self.p_upper,
            "tost_p": self.tost_p,
            "degrees_of_freedom": self.degrees_of_freedom,
            "tost_ci": self.tost_ci.to_dict(),
            "nhst_ci": self.nhst_ci.to_dict(),
            "nhst_t": self.nhst_t,
            "nhst_p": self.nhst_p,
            "conclusion": self.conclusion.value,
            "conclusion_text": self.conclusion.description,
            "mean_difference": self.mean_difference,
            "standard_error": self.standard_error,
            "bounds": self.bounds.to_dict(),
            "alpha": self.alpha,
            "equal_variance": self.equal_variance,
            "cohens_d": self.cohens_d,
        }


def _is_finite_number(value: Any) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def _check_finite(name: str, value: float) -> None:
    if not _is_finite_number(value):
        raise InvalidInputError(f"{name} must be finite, got {value}")


def _check_size(name: str, value: int) -> None:
    try:
        is_integer = not isinstance(value, bool) and int(value) == value
    except (TypeError, ValueError, OverflowError):
        is_integer = False
    if not is_integer or value < 2:
        raise InvalidInputError(f"{name} must be an integer >= 2, got {value}")


def _validate_inputs(
    mean1: float,
    sd1: float,
    n1: int,
    mean2: float,
    sd2: float,
    n2: int,
    low_bound: float,
    high_bound: float,
    alpha: float,
) -> None:
    _check_size("n1", n1)
    _check_size("n2", n2)
    for name, value in (("mean1", mean1), ("mean2", mean2), ("sd1", sd1), ("sd2", sd2)):
        _check_finite(name, value)
    if sd1 <= 0 or sd2 <= 0:
        raise InvalidInputError(f"Standard deviations must be positive, got sd1={sd1}, sd2={sd2}")
    _check_finite("alpha", alpha)
    # The TOST interval has confidence 1 - 2 * alpha
    if not 0 < alpha < 0.5:
        raise InvalidInputError(f"alpha must be in (0, 0.5), got {alpha}")
    # Bounds validation lives in EquivalenceBounds
    EquivalenceBounds(low_bound, high_bound)


def _finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise NumericalError(f"{name} evaluated to a non-finite value")
    return value


def equivalence_test(
    mean1: float,
    sd1: float,
    n1: int,
    mean2: float,
    sd2: float,
    n2: int,
    low_bound: float,
    high_bound: float,
    alpha: float = 0.05,
    equal_variance: bool = True,
) -> EquivalenceTestResult:
    """
    Raw-score TOST for two independent groups.

    Args:
        mean1, sd1, n1: Summary statistics of group 1
        mean2, sd2, n2: Summary statistics of group 2
        low_bound: Lower equivalence bound for mean1 - mean2
        high_bound: Upper equivalence bound for mean1 - mean2
        alpha: Significance level of each one-sided test
        equal_variance: Pooled t-test if True, Welch otherwise

    Returns:
        EquivalenceTestResult

    Raises:
        InvalidInputError: Sizes, spreads, bounds or alpha out of range
        NumericalError: Degenerate standard error or t-distribution value
    """
    _validate_inputs(mean1, sd1, n1, mean2, sd2, n2, low_bound, high_bound, alpha)
    n1, n2 = int(n1), int(n2)
    bounds = EquivalenceBounds(float(low_bound), float(high_bound))

    se, df = mean_difference_standard_error(sd1, n1, sd2, n2, equal_variance)
    diff = float(mean1 - mean2)

    # Shift the observed difference toward each bound
    t_lower = _finite("t_lower", (diff - bounds.low) / se)
    t_upper = _finite("t_upper", (diff - bounds.high) / se)
    p_lower = _finite("p_lower", stats.t.sf(t_lower, df))
    p_upper = _finite("p_upper", stats.t.cdf(t_upper, df))

    nhst_t = _finite("nhst_t", diff / se)
    nhst_p = _finite("nhst_p", 2 * stats.t.sf(abs(nhst_t), df))

    tost_ci = t_interval(diff, se, df, 1 - 2 * alpha, method="tost")
    nhst_ci = t_interval(diff, se, df, 1 - alpha, method="nhst")

    equivalent = p_lower < alpha and p_upper < alpha
    different = nhst_p < alpha
    conclusion = EquivalenceConclusion.classify(equivalent, different)

    logger.debug(
        f"TOST diff={diff:.4f} se={se:.4f} df={df:.2f} "
        f"p_lower={p_lower:.4g} p_upper={p_upper:.4g} -> {conclusion.value}"
    )

    return EquivalenceTestResult(
        t_lower=t_lower,
        p_lower=p_lower,
        t_upper=t_upper,
        p_upper=p_upper,
        degrees_of_freedom=df,
        tost_ci=tost_ci,
        nhst_ci=nhst_ci,
        nhst_t=nhst_t,
        nhst_p=nhst_p,
        conclusion=conclusion,
        mean_difference=diff,
        standard_error=se,
        bounds=bounds,
        alpha=alpha,
        equal_variance=equal_variance,
        cohens_d=cohens_d(mean1, sd1, n1, mean2, sd2, n2),
    )


def equivalence_test_from_summaries(
    summary1: SampleSummary,
    summary2: SampleSummary,
    bounds: EquivalenceBounds,
    alpha: float = 0.05,
    equal_variance: bool = True,
) -> EquivalenceTestResult:
    """Run the TOST on two precomputed group summaries."""
    return equivalence_test(
        summary1.mean, summary1.standard_deviation, summary1.size,
        summary2.mean, summary2.standard_deviation, summary2.size,
        bounds.low, bounds.high,
        alpha=alpha,
        equal_variance=equal_variance,
    )


def equivalence_test_from_samples(
    sample1: Union[Sequence[float], np.ndarray],
    sample2: Union[Sequence[float], np.ndarray],
    bounds: EquivalenceBounds,
    alpha: float = 0.05,
    equal_variance: bool = True,
) -> EquivalenceTestResult:
    """Summarize two raw samples (NaNs dropped) and run the TOST."""
    return equivalence_test_from_summaries(
        SampleSummary.from_observations(sample1, label="sample1"),
        SampleSummary.from_observations(sample2, label="sample2"),
        bounds,
        alpha=alpha,
        equal_variance=equal_variance,
    )


def bounds_from_cohens_d(
    d_low: float,
    d_high: float,
    sd1: float,
    n1: int,
    sd2: float,
    n2: int,
) -> EquivalenceBounds:
    """Convert standardized (Cohen's d) bounds to the raw scale."""
    _check_size("n1", n1)
    _check_size("n2", n2)
    if sd1 <= 0 or sd2 <= 0:
        raise InvalidInputError(f"Standard deviations must be positive, got sd1={sd1}, sd2={sd2}")
    sp = pooled_standard_deviation(sd1, n1, sd2, n2)
    return EquivalenceBounds(low=d_low * sp, high=d_high * sp)


def tost_power(
    n_per_group: int,
    sd: float,
    bounds: EquivalenceBounds,
    true_difference: float = 0.0,
    alpha: float = 0.05,
) -> float:
    """
    Approximate power of a pooled TOST with equal group sizes.

    Each one-sided rejection region is evaluated with a central t
    distribution shifted by the standardized distance to its bound,
    assuming equal n and a common SD. This is not the exact
    noncentral-t calculation, though the two agree closely once each
    group has a few dozen observations.

    Args:
        n_per_group: Observations in each group
        sd: Common standard deviation
        bounds: Raw equivalence bounds
        true_difference: Assumed population mean difference
        alpha: Significance level of each one-sided test

    Returns:
        Power in [0, 1]
    """
    _check_size("n_per_group", n_per_group)
    if not sd > 0:
        raise InvalidInputError(f"sd must be positive, got {sd}")
    if not 0 < alpha < 0.5:
        raise InvalidInputError(f"alpha must be in (0, 0.5), got {alpha}")

    se = sd * np.sqrt(2 / n_per_group)
    df = 2 * n_per_group - 2
    t_crit = stats.t.ppf(1 - alpha, df)

    power = (
        stats.t.cdf((bounds.high - true_difference) / se - t_crit, df)
        + stats.t.cdf((true_difference - bounds.low) / se - t_crit, df)
        - 1
    )
    return float(min(1.0, max(0.0, _finite("power", power))))


def tost_sample_size(
    sd: float,
    bounds: EquivalenceBounds,
    power: float = 0.8,
    true_difference: float = 0.0,
    alpha: float = 0.05,
    max_n: int = 100000,
) -> int:
    """
    Smallest per-group size whose TOST power reaches the target.

    Raises:
        NumericalError: Target not reached within max_n (e.g. the true
            difference lies outside the bounds)
    """
    if not 0 < power < 1:
        raise InvalidInputError(f"power must be in (0, 1), got {power}")

    def reaches(n: int) -> bool:
        return tost_power(n, sd, bounds, true_difference, alpha) >= power

    # low never reaches the target, high always does
    low, high = 1, 2
    while not reaches(high):
        if high >= max_n:
            raise NumericalError(f"Power {power} not reached with n <= {max_n} per group")
        low, high = high, min(high * 2, max_n)

    while high - low > 1:
        mid = (low + high) // 2
        if reaches(mid):
            high = mid
        else:
            low = mid

    logger.debug(f"TOST sample size for power {power}: {high} per group")
    return high
