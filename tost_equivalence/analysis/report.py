"""
Text and JSON reporting for equivalence test results.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import numpy as np

from .equivalence import EquivalenceTestResult, EquivalenceConclusion


logger = logging.getLogger(__name__)


_CONCLUSION_SENTENCES = {
    EquivalenceConclusion.EQUIVALENT_AND_DIFFERENT: (
        "the observed effect is statistically different from zero "
        "and statistically equivalent to zero (non-zero but trivially small)"
    ),
    EquivalenceConclusion.EQUIVALENT: (
        "the observed effect is statistically not different from zero "
        "and statistically equivalent to zero"
    ),
    EquivalenceConclusion.DIFFERENT_NOT_EQUIVALENT: (
        "the observed effect is statistically different from zero "
        "and statistically not equivalent to zero"
    ),
    EquivalenceConclusion.UNDETERMINED: (
        "the observed effect is statistically not different from zero "
        "and statistically not equivalent to zero (undetermined, possibly underpowered)"
    ),
}


def _format_p(p: float) -> str:
    return "< 0.001" if p < 0.001 else f"= {p:.3f}"


def _format_df(df: float) -> str:
    return f"{df:.0f}" if float(df).is_integer() else f"{df:.2f}"


def conclusion_sentence(result: EquivalenceTestResult) -> str:
    """Single-sentence interpretation of the combined outcome."""
    return (
        "Based on the equivalence test and the null-hypothesis test combined, "
        f"we can conclude that {_CONCLUSION_SENTENCES[result.conclusion]}."
    )


def format_equivalence_report(
    result: EquivalenceTestResult,
    label1: str = "Group 1",
    label2: str = "Group 2",
) -> str:
    """
    Format an equivalence test as a plain-text report.

    Args:
        result: Engine output
        label1: Name of group 1
        label2: Name of group 2

    Returns:
        Multi-line report string
    """
    df = _format_df(result.degrees_of_freedom)
    method = "pooled variance" if result.equal_variance else "Welch"
    tost_level = result.tost_ci.confidence_level
    nhst_level = result.nhst_ci.confidence_level

    lines = [
        "=" * 60,
        "TWO ONE-SIDED TESTS (TOST) FOR EQUIVALENCE",
        "=" * 60,
        f"Comparison: {label1} - {label2} ({method})",
        f"Mean difference: {result.mean_difference:.3f} (SE = {result.standard_error:.3f})",
        f"Cohen's d: {result.cohens_d:.3f}",
        f"Equivalence bounds (raw scale): [{result.bounds.low:.3f}, {result.bounds.high:.3f}]",
        f"Alpha: {result.alpha}",
        "",
        "Equivalence test:",
        f"  Lower bound test: t({df}) = {result.t_lower:.3f}, p {_format_p(result.p_lower)}",
        f"  Upper bound test: t({df}) = {result.t_upper:.3f}, p {_format_p(result.p_upper)}",
        f"  {tost_level:.0%} CI: [{result.tost_ci.lower:.3f}, {result.tost_ci.upper:.3f}]",
        f"  The equivalence test was "
        f"{'significant' if result.equivalence_significant else 'non-significant'}, "
        f"t({df}) = {result.tost_t:.3f}, p {_format_p(result.tost_p)}.",
        "",
        "Null hypothesis test:",
        f"  t({df}) = {result.nhst_t:.3f}, p {_format_p(result.nhst_p)}",
        f"  {nhst_level:.0%} CI: [{result.nhst_ci.lower:.3f}, {result.nhst_ci.upper:.3f}]",
        f"  The null hypothesis test was "
        f"{'significant' if result.nhst_significant else 'non-significant'}.",
        "",
        f"Conclusion: {result.conclusion.description}",
        conclusion_sentence(result),
        "=" * 60,
    ]
    return "\n".join(lines)


def _to_serializable(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _to_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_serializable(v) for v in obj]
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, (np.integer, np.floating)):
        return float(obj)
    if hasattr(obj, "to_dict"):
        return _to_serializable(obj.to_dict())
    return obj


def export_result(
    result: EquivalenceTestResult,
    output_path: Path,
    metadata: Optional[Dict[str, Any]] = None,
) -> Path:
    """Write a result (and optional run metadata) as JSON."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = {"result": result.to_dict()}
    if metadata:
        payload["metadata"] = metadata

    with open(output_path, "w") as f:
        json.dump(_to_serializable(payload), f, indent=2)

    logger.info(f"Result written to {output_path}")
    return output_path
