import math

import numpy as np
import pytest

from cafarank.core.aggregate import nan_mean, nan_quantiles, summarize, summarize_pool
from cafarank.core.errors import EmptyInputError, LengthMismatchError
from cafarank.core.types import BootstrapSample


def _sample(mid, values, coverage=None, covered=None):
    n = len(values)
    return BootstrapSample(
        model_id=mid,
        values=values,
        coverage_fraction=coverage if coverage is not None else [0.5] * n,
        covered_count=covered if covered is not None else [20.0] * n,
    )


def test_nan_mean_ignores_nan():
    assert nan_mean([1.0, float("nan"), 3.0]) == pytest.approx(2.0)


def test_nan_mean_all_nan_is_nan():
    assert math.isnan(nan_mean([float("nan"), float("nan")]))


def test_quantiles_use_linear_interpolation():
    q05, q95 = nan_quantiles([1.0, 2.0, 3.0, 4.0, 5.0])
    assert q05 == pytest.approx(1.2)
    assert q95 == pytest.approx(4.8)


def test_quantiles_drop_nan_before_interpolating():
    q05, q95 = nan_quantiles([1.0, float("nan"), 3.0])
    assert q05 == pytest.approx(1.1)
    assert q95 == pytest.approx(2.9)


def test_quantiles_all_nan():
    q05, q95 = nan_quantiles([float("nan")] * 3)
    assert math.isnan(q05) and math.isnan(q95)


def test_summarize_orders_interval_around_mean():
    rng = np.random.default_rng(7)
    for _ in range(20):
        values = rng.normal(0.5, 0.1, size=50)
        values[rng.integers(0, 50, size=5)] = np.nan
        agg = summarize(_sample("m", values.tolist()))
        assert agg.q05 <= agg.mean <= agg.q95


def test_summarize_coverage_and_flags():
    agg = summarize(_sample("m", [0.3, 0.4], coverage=[0.0, float("nan")], covered=[4.0, 6.0]))
    assert agg.coverage == pytest.approx(0.0)
    assert agg.mean_covered == pytest.approx(5.0)
    assert agg.any_coverage is False


def test_sample_rejects_misaligned_vectors():
    with pytest.raises(LengthMismatchError):
        BootstrapSample(model_id="m", values=[0.1, 0.2], coverage_fraction=[0.5], covered_count=[1.0, 2.0])


def test_sample_converts_none_to_nan():
    s = _sample("m", [None, 0.2])
    assert math.isnan(s.values[0])


def test_pool_matches_single_model_path():
    nan = float("nan")
    samples = [
        _sample("a", [0.1, 0.2, 0.3, 0.4]),
        _sample("b", [nan, 0.5, nan, 0.7], coverage=[0.0, 0.1, nan, 0.3]),
        _sample("c", [nan] * 4, coverage=[0.0] * 4),
    ]
    pooled = summarize_pool(samples)
    for s in samples:
        single = summarize(s)
        got = pooled[s.model_id]
        for field in ("mean", "q05", "q95", "coverage", "mean_covered"):
            a, b = getattr(single, field), getattr(got, field)
            assert (math.isnan(a) and math.isnan(b)) or a == pytest.approx(b)
        assert single.any_coverage == got.any_coverage


def test_pool_rejects_mixed_replicate_counts():
    with pytest.raises(LengthMismatchError):
        summarize_pool([_sample("a", [0.1, 0.2]), _sample("b", [0.1, 0.2, 0.3])])


def test_pool_rejects_empty():
    with pytest.raises(EmptyInputError):
        summarize_pool([])
