import math

import pytest

from cobb_douglas_explorer import config
from cobb_douglas_explorer.production import (
    CapitalDomain,
    ComparisonPair,
    InvalidParameter,
    SamplePoint,
    compare_outputs,
    generate_baseline_curve,
    generate_capital_grid,
    generate_curve,
    marker_upper_bound,
    nearest_sample,
    recompute,
    validate_parameters,
)


def test_default_grid_spans_one_to_twenty():
    grid = generate_capital_grid()
    assert len(grid) == 96
    assert grid[0] == 1.0
    assert grid[-1] == 20.0
    assert all(k == round(k, 1) for k in grid)
    assert all(a < b for a, b in zip(grid, grid[1:]))


def test_custom_domain_is_inclusive():
    assert generate_capital_grid(CapitalDomain(1.0, 2.0, 0.5)) == [1.0, 1.5, 2.0]
    assert generate_capital_grid((2.0, 2.0, 0.2)) == [2.0]


@pytest.mark.parametrize(
    "domain",
    [
        CapitalDomain(1.0, 20.0, 0.0),
        CapitalDomain(1.0, 20.0, -0.2),
        CapitalDomain(0.0, 20.0, 0.2),
        CapitalDomain(5.0, 1.0, 0.2),
        CapitalDomain(1.0, 2.0, 0.05),
    ],
)
def test_invalid_domain_rejected(domain):
    with pytest.raises(InvalidParameter):
        generate_capital_grid(domain)


def test_curve_points_follow_formula():
    curve = generate_curve(10, 10, 0.3)
    assert len(curve) == 96
    assert curve[0] == SamplePoint(1.0, round(10 * 1.0 ** 0.3 * 10 ** (1.0 - 0.3), 2))
    for point in curve:
        expected = 10 * point.k ** 0.3 * 10 ** (1.0 - 0.3)
        assert point.output == round(expected, 2)


@pytest.mark.parametrize(
    "A, N, alpha",
    [(10, 10, 0.3), (1, 1, 0.01), (20, 20, 0.99), (3.5, 7.5, 0.5), (0.2, 150.0, 0.73)],
)
def test_curve_is_non_decreasing_in_capital(A, N, alpha):
    outputs = [point.output for point in generate_curve(A, N, alpha)]
    assert all(a <= b for a, b in zip(outputs, outputs[1:]))


def test_curve_is_repeatable():
    assert generate_curve(7.5, 12, 0.42) == generate_curve(7.5, 12, 0.42)


def test_doubling_productivity_doubles_output():
    single = generate_curve(6, 9, 0.35)
    double = generate_curve(12, 9, 0.35)
    for a, b in zip(single, double):
        assert a.k == b.k
        # each side rounded to cents independently
        assert abs(b.output - 2 * a.output) <= 0.011


def test_default_parameters_give_one_hundred():
    assert compare_outputs(10, 10, 0.3, 10) == ComparisonPair(100.0, 100.0)


def test_baseline_ignores_current_parameters():
    first = compare_outputs(3, 4, 0.8, 10)
    second = compare_outputs(19, 2, 0.1, 10)
    assert first.baseline_output == second.baseline_output == 100.0
    assert generate_baseline_curve() == generate_curve(10, 10, 0.25)


def test_small_alpha_approaches_productivity_times_labor():
    pair = compare_outputs(10, 10, 0.01, 20)
    assert 100.0 < pair.current_output < 101.0


def test_marker_bound_has_ten_percent_headroom():
    assert marker_upper_bound(ComparisonPair(100.0, 90.0)) == pytest.approx(110.0)
    assert marker_upper_bound(ComparisonPair(40.0, 80.0)) == pytest.approx(88.0)


@pytest.mark.parametrize("K", [1.0, 4.5, 10.0, 12.5, 19.5, 20.0])
def test_comparison_matches_nearest_sample(K):
    A, N, alpha = 8.0, 11.0, 0.45
    curve = generate_curve(A, N, alpha)
    pair = compare_outputs(A, N, alpha, K)
    point = nearest_sample(curve, K)
    marginal = alpha * pair.current_output / K
    assert abs(point.output - pair.current_output) <= marginal * config.K_STEP + 0.01


def test_nearest_sample_edges():
    assert nearest_sample([], 3.0) is None
    series = [SamplePoint(1.0, 1.0), SamplePoint(1.2, 2.0)]
    assert nearest_sample(series, 1.1).k == 1.0
    assert nearest_sample(series, 50.0).k == 1.2


@pytest.mark.parametrize(
    "A, N, alpha, K, name",
    [
        (10, 10, 0.0, 10, "alpha"),
        (10, 10, 1.0, 10, "alpha"),
        (10, 10, -0.3, 10, "alpha"),
        (0, 10, 0.3, 10, "A"),
        (10, -1, 0.3, 10, "N"),
        (10, 10, 0.3, 0, "K"),
        (math.nan, 10, 0.3, 10, "A"),
        (10, math.inf, 0.3, 10, "N"),
        ("ten", 10, 0.3, 10, "A"),
    ],
)
def test_invalid_parameters_rejected(A, N, alpha, K, name):
    with pytest.raises(InvalidParameter) as excinfo:
        compare_outputs(A, N, alpha, K)
    assert excinfo.value.name == name
    assert isinstance(excinfo.value, ValueError)


def test_generate_curve_validates_alpha():
    with pytest.raises(InvalidParameter):
        generate_curve(10, 10, 1.2)


def test_validate_parameters_accepts_missing_capital():
    validate_parameters(1, 1, 0.5)


def test_recompute_bundles_all_derived_values():
    derived = recompute(config.DEFAULT_PARAMS)
    assert derived.current == generate_curve(10, 10, 0.3)
    assert derived.baseline == generate_baseline_curve()
    assert derived.comparison == ComparisonPair(100.0, 100.0)
    assert derived.marker_top == pytest.approx(110.0)


def test_recompute_accepts_other_baseline():
    params = dict(config.DEFAULT_PARAMS)
    derived = recompute(params, baseline={"A": 20.0, "N": 10.0, "alpha": 0.25})
    assert derived.comparison.baseline_output == 200.0
    assert derived.baseline == generate_curve(20, 10, 0.25)


@pytest.mark.parametrize("step", [0.1, 0.15, 0.3])
def test_fine_steps_keep_capital_strictly_ascending(step):
    ks = [point.k for point in generate_curve(10, 10, 0.3, CapitalDomain(1.0, 3.0, step))]
    assert all(a < b for a, b in zip(ks, ks[1:]))


@pytest.mark.parametrize(
    "baseline, name",
    [
        ({"A": 10.0, "N": -10.0, "alpha": 0.25}, "N"),
        ({"A": 0.0, "N": 10.0, "alpha": 0.25}, "A"),
        ({"A": 10.0, "N": 10.0, "alpha": 1.0}, "alpha"),
    ],
)
def test_recompute_rejects_invalid_baseline(baseline, name):
    with pytest.raises(InvalidParameter) as excinfo:
        recompute(config.DEFAULT_PARAMS, baseline=baseline)
    assert excinfo.value.name == name
