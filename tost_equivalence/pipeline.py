"""
End-to-end VOT equivalence analysis.

Simulates (or accepts) a two-group table, summarizes the groups, runs
the equivalence test and writes the report, JSON result and figures.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import pandas as pd

from .analysis import (
    EquivalenceBounds,
    EquivalenceTestResult,
    equivalence_test_from_summaries,
    format_equivalence_report,
    export_result,
)
from .config import AnalysisConfig
from .data import SampleSummary, VOTSimulator, describe_groups, summarize_groups
from .errors import InvalidInputError
from .visualization import TOSTPlotter


logger = logging.getLogger(__name__)


@dataclass
class AnalysisRun:
    """Everything produced by one analysis."""
    data: pd.DataFrame
    summaries: Dict[str, SampleSummary]
    result: EquivalenceTestResult
    report: str
    artifacts: List[Path] = field(default_factory=list)

    @property
    def labels(self) -> List[str]:
        return list(self.summaries.keys())


def _select_groups(data: pd.DataFrame, group_column: str, value_column: str) -> pd.DataFrame:
    """Rows of the first two groups, in order of first appearance."""
    missing = [col for col in (group_column, value_column) if col not in data.columns]
    if missing:
        raise InvalidInputError(f"Missing columns: {missing}")

    labels = list(pd.unique(data[group_column].dropna()))
    if len(labels) < 2:
        raise InvalidInputError(f"Need two groups, found {labels}")
    if len(labels) > 2:
        logger.warning(f"Table has {len(labels)} groups; comparing {labels[0]} and {labels[1]}")

    return data[data[group_column].isin(labels[:2])].reset_index(drop=True)


def run_analysis(
    config: AnalysisConfig,
    data: Optional[pd.DataFrame] = None,
    group_column: str = "group",
    value_column: str = "vot",
) -> AnalysisRun:
    """
    Run the equivalence analysis for the first two groups of a table.

    Args:
        config: Analysis configuration
        data: Long-format table; simulated from config when omitted.
            Rows of any group after the first two are dropped.

    Returns:
        AnalysisRun
    """
    if data is None:
        data = VOTSimulator(config.simulation.seed).simulate(config.simulation.groups)

    data = _select_groups(data, group_column, value_column)
    summaries = summarize_groups(data, group_column, value_column)

    (label1, summary1), (label2, summary2) = summaries.items()
    for summary in (summary1, summary2):
        logger.info(
            f"{summary.label}: mean={summary.mean:.2f} sd={summary.standard_deviation:.2f} "
            f"n={summary.size}"
        )

    test = config.test
    result = equivalence_test_from_summaries(
        summary1,
        summary2,
        EquivalenceBounds(test.low_bound, test.high_bound),
        alpha=test.alpha,
        equal_variance=test.equal_variance,
    )
    logger.info(f"Conclusion: {result.conclusion.description}")

    report = format_equivalence_report(result, label1, label2)
    return AnalysisRun(data=data, summaries=summaries, result=result, report=report)


def save_artifacts(
    run: AnalysisRun,
    config: AnalysisConfig,
    output_dir: Optional[Path] = None,
    group_column: str = "group",
    value_column: str = "vot",
) -> List[Path]:
    """Write report, JSON result, data and descriptives tables and (optionally) figures."""
    output_dir = Path(output_dir or config.output.directory)
    output_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    report_path = output_dir / f"tost_report_{stamp}.txt"
    report_path.write_text(run.report + "\n")

    data_path = output_dir / f"vot_data_{stamp}.csv"
    run.data.to_csv(data_path, index=False)

    descriptives_path = output_dir / f"descriptives_{stamp}.csv"
    describe_groups(run.data, group_column, value_column).to_csv(descriptives_path)

    result_path = export_result(
        run.result,
        output_dir / f"tost_result_{stamp}.json",
        metadata={
            "groups": {k: v.to_dict() for k, v in run.summaries.items()},
            "config": config.to_dict(),
        },
    )
    saved = [report_path, data_path, descriptives_path, result_path]

    if config.output.save_figures:
        plotter = TOSTPlotter()
        fig = plotter.create_summary_figure(run.data, run.result, group_column, value_column)
        saved.extend(plotter.save_figure(
            fig,
            output_dir / "figures" / f"tost_{stamp}",
            config.output.figure_formats,
        ))
        plt.close(fig)

    run.artifacts.extend(saved)
    logger.info(f"Saved {len(saved)} artifacts to {output_dir}")
    return saved
