"""
components/charts.py - Plotly chart builders for the results screen.
"""

import plotly.graph_objects as go
import pandas as pd
from typing import Dict, Mapping


TIER_COLORS = {
    "green": "#16a34a",
    "yellow": "#eab308",
    "orange": "#f97316",
    "red": "#dc2626",
}


def breakdown_frame(breakdown: Mapping[str, int], labels: Mapping[str, str]) -> pd.DataFrame:
    """One row per category in display order: Category, Score."""
    return pd.DataFrame(
        [{"Category": labels.get(c, c), "Score": s} for c, s in breakdown.items()]
    )


def breakdown_bar_chart(df: pd.DataFrame, color: str = "#2563eb") -> go.Figure:
    """Horizontal bar chart of per-category scores out of 25."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=df["Score"], y=df["Category"], orientation="h",
        marker_color=color, text=[f"{s}/25" for s in df["Score"]],
        textposition="outside", textfont=dict(size=14, color="#1e293b"),
    ))
    fig.update_layout(
        title="Score Breakdown",
        xaxis=dict(title="Score", range=[0, 28]),
        yaxis=dict(autorange="reversed"),
        height=320, margin=dict(l=180, r=40, t=50, b=40),
        showlegend=False, plot_bgcolor="white",
    )
    return fig


def score_gauge(total: int, tier_color: str) -> go.Figure:
    """Gauge for the 0-100 total, colored by tier."""
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=total,
        number=dict(suffix="/100"),
        gauge=dict(
            axis=dict(range=[0, 100]),
            bar=dict(color=TIER_COLORS.get(tier_color, "#6b7280")),
            steps=[
                dict(range=[0, 40], color="#fee2e2"),
                dict(range=[40, 60], color="#ffedd5"),
                dict(range=[60, 80], color="#fef9c3"),
                dict(range=[80, 100], color="#dcfce7"),
            ],
        ),
    ))
    fig.update_layout(height=260, margin=dict(t=30, b=10, l=30, r=30))
    return fig


def value_potential_chart(amounts: Dict[str, int], labels: Mapping[str, str]) -> go.Figure:
    """Bar chart of value potential per category (currency units)."""
    fig = go.Figure(go.Bar(
        x=[labels.get(k, k) for k in amounts],
        y=list(amounts.values()),
        marker_color="#4f46e5",
    ))
    fig.update_layout(
        title="Value Potential by Area",
        yaxis=dict(title="Estimated annual value"),
        height=320, margin=dict(t=50, b=40),
        plot_bgcolor="white",
    )
    return fig
