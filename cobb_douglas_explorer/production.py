from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence

from . import config

logger = logging.getLogger(__name__)


class InvalidParameter(ValueError):
    """Raised when a parameter leaves the domain where Y = A·K^α·N^(1-α) is defined."""

    def __init__(self, name: str, value: Any, reason: str):
        self.name = name
        self.value = value
        super().__init__(f"{name}={value!r}: {reason}")


class SamplePoint(NamedTuple):
    k: float
    output: float


class ComparisonPair(NamedTuple):
    current_output: float
    baseline_output: float


class CapitalDomain(NamedTuple):
    k_min: float
    k_max: float
    step: float


class Recomputation(NamedTuple):
    current: List[SamplePoint]
    baseline: List[SamplePoint]
    comparison: ComparisonPair
    marker_top: float


DEFAULT_DOMAIN = CapitalDomain(config.K_MIN, config.K_MAX, config.K_STEP)


def _reject(name: str, value: Any, reason: str) -> None:
    logger.warning("Rejected %s=%r (%s)", name, value, reason)
    raise InvalidParameter(name, value, reason)


def _check_finite(name: str, value: Any) -> float:
    try:
        num = float(value)
    except (TypeError, ValueError):
        num = math.nan
    if not math.isfinite(num):
        _reject(name, value, "not a finite number")
    return num


def validate_parameters(
    A: Any,
    N: Any,
    alpha: Any,
    K: Optional[Any] = None,
) -> None:
    values = {"A": A, "N": N, "alpha": alpha}
    if K is not None:
        values["K"] = K
    for name, raw in values.items():
        num = _check_finite(name, raw)
        if name == "alpha":
            if not 0.0 < num < 1.0:
                _reject(name, raw, "must lie strictly between 0 and 1")
        elif num <= 0.0:
            _reject(name, raw, "must be positive")


def validate_domain(domain: Sequence[float]) -> None:
    domain = CapitalDomain(*domain)
    k_min = _check_finite("k_min", domain.k_min)
    k_max = _check_finite("k_max", domain.k_max)
    step = _check_finite("step", domain.step)
    if step <= 0.0:
        _reject("step", step, "must be positive")
    # k is rounded to CAPITAL_DECIMALS; a finer step repeats k values
    min_step = 10 ** -config.CAPITAL_DECIMALS
    if step < min_step - 1e-12:
        _reject("step", step, f"must be at least {min_step:g}")
    if k_min <= 0.0:
        _reject("k_min", k_min, "must be positive")
    if k_max < k_min:
        _reject("k_max", k_max, "must not be below k_min")


def cobb_douglas(A: float, N: float, alpha: float, k: float) -> float:
    return A * (k ** alpha) * (N ** (1.0 - alpha))


def generate_capital_grid(domain: CapitalDomain = DEFAULT_DOMAIN) -> List[float]:
    """Capital values from ``k_min`` to ``k_max`` inclusive.

    Each point is derived from its index rather than by repeated addition, so
    the last point lands on ``k_max`` when the step divides the range.
    """
    validate_domain(domain)
    k_min, k_max, step = (float(v) for v in domain)
    count = int(math.floor((k_max - k_min) / step + 1e-9)) + 1
    return [round(k_min + i * step, config.CAPITAL_DECIMALS) for i in range(count)]


def evaluate_curve(A: float, N: float, alpha: float, ks: Sequence[float]) -> List[SamplePoint]:
    return [
        SamplePoint(k, round(cobb_douglas(A, N, alpha, k), config.OUTPUT_DECIMALS))
        for k in ks
    ]


def generate_curve(
    A: float,
    N: float,
    alpha: float,
    domain: CapitalDomain = DEFAULT_DOMAIN,
) -> List[SamplePoint]:
    validate_parameters(A, N, alpha)
    return evaluate_curve(float(A), float(N), float(alpha), generate_capital_grid(domain))


def generate_baseline_curve(
    domain: CapitalDomain = DEFAULT_DOMAIN,
    baseline: Mapping[str, float] = config.BASELINE_PARAMS,
) -> List[SamplePoint]:
    return generate_curve(baseline["A"], baseline["N"], baseline["alpha"], domain)


def compare_outputs(
    A: float,
    N: float,
    alpha: float,
    K: float,
    baseline: Mapping[str, float] = config.BASELINE_PARAMS,
) -> ComparisonPair:
    validate_parameters(A, N, alpha, K)
    validate_parameters(baseline["A"], baseline["N"], baseline["alpha"])
    current = cobb_douglas(float(A), float(N), float(alpha), float(K))
    reference = cobb_douglas(baseline["A"], baseline["N"], baseline["alpha"], float(K))
    return ComparisonPair(
        round(current, config.OUTPUT_DECIMALS),
        round(reference, config.OUTPUT_DECIMALS),
    )


def marker_upper_bound(pair: ComparisonPair, headroom: float = config.MARKER_HEADROOM) -> float:
    return max(pair.current_output, pair.baseline_output) * headroom


def nearest_sample(series: Sequence[SamplePoint], k: float) -> Optional[SamplePoint]:
    if not series:
        return None
    # Ties resolve to the lower k
    return min(series, key=lambda point: (abs(point.k - k), point.k))


def recompute(
    params: Mapping[str, float],
    *,
    baseline: Mapping[str, float] = config.BASELINE_PARAMS,
    domain: CapitalDomain = DEFAULT_DOMAIN,
) -> Recomputation:
    A, N, alpha, K = (params[name] for name in config.PARAM_NAMES)
    comparison = compare_outputs(A, N, alpha, K, baseline)
    return Recomputation(
        current=generate_curve(A, N, alpha, domain),
        baseline=generate_baseline_curve(domain, baseline),
        comparison=comparison,
        marker_top=marker_upper_bound(comparison),
    )


def with_comparison(
    previous: Recomputation,
    params: Mapping[str, float],
    *,
    baseline: Mapping[str, float] = config.BASELINE_PARAMS,
) -> Recomputation:
    """Refresh only the K-dependent values, reusing both series."""
    A, N, alpha, K = (params[name] for name in config.PARAM_NAMES)
    comparison = compare_outputs(A, N, alpha, K, baseline)
    return previous._replace(comparison=comparison, marker_top=marker_upper_bound(comparison))
