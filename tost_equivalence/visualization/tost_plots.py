"""
Equivalence test plots.

Provides matplotlib-based visualizations of the two groups and of the
TOST confidence interval against the equivalence bounds.
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes
from matplotlib.gridspec import GridSpec
from typing import List, Optional, Tuple
from pathlib import Path

from ..analysis.equivalence import EquivalenceTestResult, EquivalenceConclusion


class TOSTPlotter:
    """
    Plotter for group distributions and equivalence test results.
    """

    COLORS = {
        "primary": "#2E86AB",
        "secondary": "#A23B72",
        "tertiary": "#F18F01",
        "bounds": "#C73E1D",
        "positive": "#2ECC71",
        "negative": "#E74C3C",
        "neutral": "#7F8C8D",
    }

    STYLE = {
        "font.family": "sans-serif",
        "font.sans-serif": ["Arial", "Helvetica", "DejaVu Sans"],
        "font.size": 10,
        "axes.labelsize": 11,
        "axes.titlesize": 12,
        "xtick.labelsize": 9,
        "ytick.labelsize": 9,
        "legend.fontsize": 9,
        "figure.dpi": 150,
        "savefig.dpi": 300,
        "axes.linewidth": 1.0,
        "axes.spines.top": False,
        "axes.spines.right": False,
    }

    def __init__(self, seed: int = 0):
        plt.rcParams.update(self.STYLE)
        # Jitter only; never affects statistics
        self.rng = np.random.default_rng(seed)

    def plot_group_distributions(
        self,
        df: pd.DataFrame,
        group_column: str = "group",
        value_column: str = "vot",
        title: str = "VOT by Group",
        ylabel: str = "VOT (ms)",
        ax: Optional[Axes] = None,
    ) -> Tuple[Figure, Axes]:
        """
        Box plot of each group with jittered tokens and group means.

        Args:
            df: Long-format table
            group_column: Group label column
            value_column: Measurement column
            title: Plot title
            ylabel: Y-axis label
            ax: Optional axes to plot on

        Returns:
            Figure and Axes objects
        """
        if ax is None:
            fig, ax = plt.subplots(figsize=(6, 5))
        else:
            fig = ax.figure

        groups = list(pd.unique(df[group_column]))
        data = [df.loc[df[group_column] == g, value_column].dropna().to_numpy() for g in groups]
        positions = np.arange(1, len(groups) + 1)
        colors = [self.COLORS["primary"], self.COLORS["secondary"], self.COLORS["tertiary"]]

        ax.boxplot(
            data,
            positions=positions,
            widths=0.5,
            showfliers=False,
            medianprops=dict(color="black"),
        )

        for pos, values, color in zip(positions, data, colors * len(groups)):
            jitter = self.rng.uniform(-0.12, 0.12, size=len(values))
            ax.scatter(
                pos + jitter, values,
                s=18, alpha=0.6, color=color,
                edgecolors="white", linewidth=0.5, zorder=5,
            )
            ax.scatter(
                [pos], [np.mean(values)],
                marker="D", s=60, color="black", zorder=10,
            )

        ax.set_xticks(positions)
        ax.set_xticklabels([str(g) for g in groups])
        ax.set_ylabel(ylabel)
        ax.set_title(title)
        ax.grid(True, axis="y", alpha=0.3, linestyle="--")

        return fig, ax

    def plot_equivalence(
        self,
        result: EquivalenceTestResult,
        title: str = "Equivalence Test",
        xlabel: str = "Mean difference (ms)",
        ax: Optional[Axes] = None,
    ) -> Tuple[Figure, Axes]:
        """
        Mean difference with TOST (thick) and NHST (thin) intervals.

        The equivalence bounds are drawn as dashed vertical lines and
        zero as a dotted reference.
        """
        if ax is None:
            fig, ax = plt.subplots(figsize=(7, 2.5))
        else:
            fig = ax.figure

        equivalent = result.conclusion in (
            EquivalenceConclusion.EQUIVALENT,
            EquivalenceConclusion.EQUIVALENT_AND_DIFFERENT,
        )
        color = self.COLORS["positive"] if equivalent else self.COLORS["negative"]

        ax.hlines(
            0, result.nhst_ci.lower, result.nhst_ci.upper,
            color=color, linewidth=1.5,
            label=f"{result.nhst_ci.confidence_level:.0%} CI",
        )
        ax.hlines(
            0, result.tost_ci.lower, result.tost_ci.upper,
            color=color, linewidth=5,
            label=f"{result.tost_ci.confidence_level:.0%} CI",
        )
        ax.plot(
            [result.mean_difference], [0],
            marker="s", markersize=9, color="black", zorder=10,
            label="Mean difference",
        )

        for bound in (result.bounds.low, result.bounds.high):
            ax.axvline(bound, color=self.COLORS["bounds"], linestyle="--", linewidth=1.2)
        ax.axvline(0, color=self.COLORS["neutral"], linestyle=":", linewidth=1)

        span = max(
            abs(result.bounds.low), abs(result.bounds.high),
            abs(result.nhst_ci.lower), abs(result.nhst_ci.upper),
        )
        ax.set_xlim(-1.15 * span, 1.15 * span)
        ax.set_ylim(-1, 1)
        ax.set_yticks([])
        ax.set_xlabel(xlabel)
        ax.set_title(f"{title}: {result.conclusion.description}")
        ax.legend(loc="upper right", frameon=True, framealpha=0.9)

        return fig, ax

    def create_summary_figure(
        self,
        df: pd.DataFrame,
        result: EquivalenceTestResult,
        group_column: str = "group",
        value_column: str = "vot",
        output_path: Optional[Path] = None,
    ) -> Figure:
        """Two-panel figure: group distributions and equivalence interval."""
        fig = plt.figure(figsize=(12, 5))
        gs = GridSpec(1, 2, figure=fig, width_ratios=[1, 1.4], wspace=0.3)

        ax_a = fig.add_subplot(gs[0, 0])
        self.plot_group_distributions(df, group_column, value_column, ax=ax_a)

        ax_b = fig.add_subplot(gs[0, 1])
        self.plot_equivalence(result, ax=ax_b)

        for ax, label in zip([ax_a, ax_b], ["a", "b"]):
            ax.text(
                -0.1, 1.08, label,
                transform=ax.transAxes,
                fontsize=12, fontweight="bold",
                va="top", ha="right",
            )

        if output_path:
            self.save_figure(fig, output_path)

        return fig

    def save_figure(
        self,
        fig: Figure,
        path: Path,
        formats: Optional[List[str]] = None,
    ) -> List[Path]:
        """Save figure in each requested format."""
        formats = formats or ["png", "pdf"]
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        saved = []
        for fmt in formats:
            save_path = path.with_suffix(f".{fmt}")
            fig.savefig(
                save_path,
                format=fmt,
                dpi=300,
                bbox_inches="tight",
                facecolor="white",
                edgecolor="none",
            )
            saved.append(save_path)

        return saved
