"""Verbal rules for the output panel and the insight box."""

from __future__ import annotations

from typing import List, Mapping, Optional

from . import config
from .production import ComparisonPair

EQUATION_TEXT = "Y = A × K^α × N^(1-α)"

INSIGHT_INTRO = (
    "The curvature of the Cobb-Douglas production function demonstrates diminishing "
    "marginal returns to capital: as more capital is added, the additional output "
    "gained from each unit decreases."
)
INSIGHT_LEAD = "Parameter α directly controls this curvature:"
INSIGHT_POINTS = [
    "When α is close to 0: The curve flattens quickly, showing rapid diminishing returns to capital",
    "When α is close to 1: The curve remains steeper, indicating slower diminishing returns",
    "Changes in A (productivity) shift the entire curve up or down",
    "Changes in N (labor) also shift the curve's position while maintaining its shape",
]


def output_lines(comparison: ComparisonPair) -> List[str]:
    return [
        f"Current: Y = {comparison.current_output:.2f}",
        f"Baseline: Y = {comparison.baseline_output:.2f}",
    ]


def current_summary(params: Mapping[str, float]) -> str:
    return (
        f"Current: A={params['A']:.2f}, K={params['K']:.2f}, "
        f"N={params['N']:.2f}, α={params['alpha']:.2f}"
    )


def baseline_summary(K: float, baseline: Mapping[str, float] = config.BASELINE_PARAMS) -> str:
    return (
        f"Baseline: A={baseline['A']:g}, K={K:.2f}, "
        f"N={baseline['N']:g}, α={baseline['alpha']:g}"
    )


def insight_markdown() -> str:
    bullets = "\n".join(f"- {point}" for point in INSIGHT_POINTS)
    return f"{INSIGHT_INTRO}\n\n{INSIGHT_LEAD}\n\n{bullets}"


def describe_change(param: Optional[str], old: Optional[float], new: Optional[float]) -> str:
    if param is None or old is None or new is None:
        return "Parameters reset to their defaults."
    if abs(new - old) < 1e-9:
        return ""
    up = new > old
    if param == "A":
        return f"{'Raising' if up else 'Lowering'} A shifts the whole curve {'up' if up else 'down'}."
    if param == "N":
        return (
            f"{'More' if up else 'Less'} labor shifts the curve {'up' if up else 'down'} "
            "while keeping its shape."
        )
    if param == "alpha":
        if up:
            return "A larger α keeps the curve steeper: returns to capital diminish more slowly."
        return "A smaller α flattens the curve sooner: returns to capital diminish faster."
    if param == "K":
        return (
            f"Moving K to {new:.1f} slides the marker along both curves; "
            "the curves themselves do not change."
        )
    return ""
