from __future__ import annotations

from typing import List, Sequence

import plotly.graph_objects as go

from . import config
from .production import ComparisonPair, Recomputation, SamplePoint


def series_trace(series: Sequence[SamplePoint], *, name: str, line_style: dict) -> go.Scatter:
    return go.Scatter(
        x=[p.k for p in series],
        y=[p.output for p in series],
        mode="lines",
        name=name,
        line=dict(line_style),
        hovertemplate=name + "<br>K=%{x:.1f}<br>Y=%{y:.2f}<extra></extra>",
    )


def marker_trace(K: float, top: float) -> go.Scatter:
    return go.Scatter(
        x=[K, K],
        y=[0.0, top],
        mode="lines",
        name=config.MARKER_TRACE_NAME,
        line=dict(config.MARKER_LINE_STYLE),
        hoverinfo="skip",
    )


def line_traces(derived: Recomputation, K: float) -> List[go.Scatter]:
    return [
        series_trace(
            derived.current,
            name=config.CURRENT_TRACE_NAME,
            line_style=config.CURRENT_LINE_STYLE,
        ),
        series_trace(
            derived.baseline,
            name=config.BASELINE_TRACE_NAME,
            line_style=config.BASELINE_LINE_STYLE,
        ),
        marker_trace(K, derived.marker_top),
    ]


def build_line_figure(derived: Recomputation, K: float, *, uirevision: str) -> go.Figure:
    fig = go.Figure(data=line_traces(derived, K))
    fig.update_layout(
        height=config.LINE_CHART_HEIGHT,
        margin=dict(l=56, r=30, t=24, b=48),
        xaxis=dict(
            title="Level of capital (K)",
            range=[config.K_MIN, config.K_MAX],
            showgrid=True,
            gridcolor=config.FIGURE_COLORS["grid"],
            griddash="dash",
        ),
        yaxis=dict(
            title="Level of output (Y)",
            rangemode="tozero",
            showgrid=True,
            gridcolor=config.FIGURE_COLORS["grid"],
            griddash="dash",
        ),
        legend=dict(orientation="h", yanchor="top", y=-0.2, xanchor="center", x=0.5),
        plot_bgcolor="#ffffff",
        uirevision=uirevision,
    )
    return fig


def build_bar_figure(comparison: ComparisonPair, K: float) -> go.Figure:
    fig = go.Figure(
        data=[
            go.Bar(
                x=list(config.BAR_CATEGORIES),
                y=[comparison.current_output, comparison.baseline_output],
                name="Output",
                marker_color=config.FIGURE_COLORS["bar"],
                hovertemplate="%{x}<br>Y=%{y:.2f}<extra></extra>",
            )
        ]
    )
    fig.update_layout(
        title=dict(text=f"Output Comparison at K = {K:.1f}", x=0.0),
        height=config.BAR_CHART_HEIGHT,
        margin=dict(l=48, r=16, t=40, b=32),
        yaxis=dict(
            rangemode="tozero",
            showgrid=True,
            gridcolor=config.FIGURE_COLORS["grid"],
            griddash="dash",
        ),
        showlegend=False,
        plot_bgcolor="#ffffff",
    )
    return fig
