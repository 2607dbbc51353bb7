"""
Data module for VOT equivalence analyses.

Provides the two-group VOT simulator, a CSV loader and per-group
descriptive summaries.
"""

from .summaries import SampleSummary, summarize_groups, describe_groups
from .vot_simulator import (
    GroupSpec,
    VOTSimulator,
    DEFAULT_GROUPS,
    simulate_vot_dataset,
    load_vot_table,
)

__all__ = [
    "SampleSummary",
    "summarize_groups",
    "describe_groups",
    "GroupSpec",
    "VOTSimulator",
    "DEFAULT_GROUPS",
    "simulate_vot_dataset",
    "load_vot_table",
]
