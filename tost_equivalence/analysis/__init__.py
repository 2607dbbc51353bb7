"""
Analysis module for equivalence testing.

Provides the TOST engine, supporting two-sample statistics, power
planning and result reporting.
"""

from .statistics import (
    ConfidenceInterval,
    mean_difference_standard_error,
    pooled_standard_deviation,
    t_interval,
    cohens_d,
)
from .equivalence import (
    EquivalenceBounds,
    EquivalenceConclusion,
    EquivalenceTestResult,
    equivalence_test,
    equivalence_test_from_summaries,
    equivalence_test_from_samples,
    bounds_from_cohens_d,
    tost_power,
    tost_sample_size,
)
from .report import format_equivalence_report, conclusion_sentence, export_result

__all__ = [
    "ConfidenceInterval",
    "mean_difference_standard_error",
    "pooled_standard_deviation",
    "t_interval",
    "cohens_d",
    "EquivalenceBounds",
    "EquivalenceConclusion",
    "EquivalenceTestResult",
    "equivalence_test",
    "equivalence_test_from_summaries",
    "equivalence_test_from_samples",
    "bounds_from_cohens_d",
    "tost_power",
    "tost_sample_size",
    "format_equivalence_report",
    "conclusion_sentence",
    "export_result",
]
