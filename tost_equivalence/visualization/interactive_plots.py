"""
Interactive equivalence plots using Plotly.
"""

import pandas as pd
import plotly.graph_objects as go
import plotly.express as px

from ..analysis.equivalence import EquivalenceTestResult


class InteractivePlotter:
    """
    Interactive plotting of VOT groups and TOST intervals.
    """

    COLORS = px.colors.qualitative.Set2

    def __init__(self):
        self.default_layout = {
            "template": "plotly_white",
            "font": {"family": "Arial, sans-serif", "size": 12},
            "margin": {"l": 60, "r": 40, "t": 60, "b": 60},
        }

    def group_distributions_interactive(
        self,
        df: pd.DataFrame,
        group_column: str = "group",
        value_column: str = "vot",
        title: str = "VOT by Group",
    ) -> str:
        """
        Box plot with all tokens shown.

        Returns:
            JSON string for Plotly
        """
        fig = go.Figure()

        for i, group in enumerate(pd.unique(df[group_column])):
            values = df.loc[df[group_column] == group, value_column]
            fig.add_trace(go.Box(
                y=values,
                name=str(group),
                boxpoints="all",
                jitter=0.3,
                pointpos=0,
                boxmean=True,
                marker=dict(color=self.COLORS[i % len(self.COLORS)]),
                hovertemplate="<b>%{x}</b><br>VOT: %{y:.1f} ms<extra></extra>",
            ))

        fig.update_layout(
            **self.default_layout,
            title=title,
            yaxis=dict(title="VOT (ms)"),
            showlegend=False,
        )

        return fig.to_json()

    def equivalence_interactive(
        self,
        result: EquivalenceTestResult,
        title: str = "Equivalence Test",
    ) -> str:
        """
        Mean difference with both confidence intervals and the bounds.

        Returns:
            JSON string for Plotly
        """
        fig = go.Figure()

        intervals = [
            (result.nhst_ci, 2, self.COLORS[1]),
            (result.tost_ci, 8, self.COLORS[0]),
        ]
        for ci, width, color in intervals:
            fig.add_trace(go.Scatter(
                x=[ci.lower, ci.upper],
                y=[0, 0],
                mode="lines",
                line=dict(color=color, width=width),
                name=f"{ci.confidence_level:.0%} CI",
                hovertemplate="%{x:.3f}<extra></extra>",
            ))

        fig.add_trace(go.Scatter(
            x=[result.mean_difference],
            y=[0],
            mode="markers",
            marker=dict(symbol="square", size=12, color="black"),
            name="Mean difference",
            hovertemplate="Difference: %{x:.3f}<extra></extra>",
        ))

        for bound in (result.bounds.low, result.bounds.high):
            fig.add_vline(x=bound, line_dash="dash", line_color="#C73E1D")
        fig.add_vline(x=0, line_dash="dot", line_color="#7F8C8D")

        fig.update_layout(
            **self.default_layout,
            title=f"{title}: {result.conclusion.description}",
            xaxis=dict(title="Mean difference (ms)"),
            yaxis=dict(visible=False, range=[-1, 1]),
            height=300,
        )

        return fig.to_json()
