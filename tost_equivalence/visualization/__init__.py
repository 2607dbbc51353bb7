"""
Visualization module for equivalence analyses.

Provides static (matplotlib) and interactive (Plotly) plots of the
groups and of the TOST result.
"""

from .tost_plots import TOSTPlotter
from .interactive_plots import InteractivePlotter

__all__ = [
    "TOSTPlotter",
    "InteractivePlotter",
]
