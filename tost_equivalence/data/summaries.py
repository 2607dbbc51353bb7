"""
Descriptive summaries of grouped VOT observations.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Dict, Any, Optional, Sequence, Union

from ..errors import InvalidInputError


@dataclass(frozen=True)
class SampleSummary:
    """Mean, standard deviation and size of one group."""
    mean: float
    standard_deviation: float
    size: int
    label: Optional[str] = None

    @classmethod
    def from_observations(
        cls,
        values: Union[Sequence[float], np.ndarray, pd.Series],
        label: Optional[str] = None,
    ) -> "SampleSummary":
        """Summarize raw observations, ignoring missing values."""
        data = np.asarray(values, dtype=float).flatten()
        data = data[~np.isnan(data)]
        if len(data) < 2:
            raise InvalidInputError(
                f"Group {label or '?'} needs at least 2 observations, got {len(data)}"
            )
        return cls(
            mean=float(np.mean(data)),
            standard_deviation=float(np.std(data, ddof=1)),
            size=int(len(data)),
            label=label,
        )

    @property
    def standard_error(self) -> float:
        return self.standard_deviation / np.sqrt(self.size)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "mean": self.mean,
            "standard_deviation": self.standard_deviation,
            "size": self.size,
        }


def _require_columns(df: pd.DataFrame, *columns: str) -> None:
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise InvalidInputError(f"Missing columns: {missing}")


def summarize_groups(
    df: pd.DataFrame,
    group_column: str = "group",
    value_column: str = "vot",
) -> Dict[str, SampleSummary]:
    """
    Summarize each group of a long-format table.

    Groups are returned in order of first appearance.

    Args:
        df: Table with one observation per row
        group_column: Column holding the group label
        value_column: Column holding the measurement

    Returns:
        Dict mapping group label to SampleSummary
    """
    _require_columns(df, group_column, value_column)

    summaries: Dict[str, SampleSummary] = {}
    for name, group in df.groupby(group_column, sort=False):
        label = str(name)
        summaries[label] = SampleSummary.from_observations(group[value_column], label=label)

    return summaries


def describe_groups(
    df: pd.DataFrame,
    group_column: str = "group",
    value_column: str = "vot",
) -> pd.DataFrame:
    """Descriptive table (n, mean, sd, min, max) per group."""
    _require_columns(df, group_column, value_column)

    table = df.groupby(group_column, sort=False)[value_column].agg(
        n="count",
        mean="mean",
        sd=lambda s: s.std(ddof=1),
        min="min",
        max="max",
    )
    return table
