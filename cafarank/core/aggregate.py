"""Bootstrap aggregation: replicate vectors to point estimates."""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from cafarank.core.errors import EmptyInputError, LengthMismatchError
from cafarank.core.types import BootstrapSample


@dataclass(frozen=True)
class Aggregate:
    """NaN-aware summary of one model's bootstrap distribution."""

    model_id: str
    mean: float
    q05: float
    q95: float
    coverage: float
    mean_covered: float
    any_coverage: bool


def _quiet_nan(fn, *args, **kwargs):
    # numpy warns on all-NaN slices; a NaN result is the intended outcome there
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=RuntimeWarning)
        return fn(*args, **kwargs)


def nan_mean(values: np.ndarray | Sequence[float]) -> float:
    """Mean over the non-NaN entries; NaN when every entry is NaN."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return float("nan")
    return float(_quiet_nan(np.nanmean, arr))


def nan_quantiles(values: np.ndarray | Sequence[float], q: Sequence[float] = (5.0, 95.0)) -> tuple[float, ...]:
    """Linearly interpolated percentiles with NaN entries removed first."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0 or np.all(np.isnan(arr)):
        return tuple(float("nan") for _ in q)
    out = np.nanpercentile(arr, list(q), method="linear")
    return tuple(float(x) for x in out)


def summarize(sample: BootstrapSample, quantiles: tuple[float, float] = (5.0, 95.0)) -> Aggregate:
    """Reduce one model's replicates to mean, q05/q95 and average coverage."""
    q05, q95 = nan_quantiles(sample.values, quantiles)
    coverage = sample.coverage_fraction
    return Aggregate(
        model_id=sample.model_id,
        mean=nan_mean(sample.values),
        q05=q05,
        q95=q95,
        coverage=nan_mean(coverage),
        mean_covered=float(np.mean(sample.covered_count)) if sample.n_replicates else float("nan"),
        any_coverage=bool(np.any(np.nan_to_num(coverage, nan=0.0) != 0.0)),
    )


def check_replicate_count(samples: Sequence[BootstrapSample]) -> int:
    """Return the common replicate count B, or raise if the pool disagrees."""
    if not samples:
        raise EmptyInputError("bootstrap statistics collection is empty")
    counts = {s.n_replicates for s in samples}
    if len(counts) != 1:
        by_count: dict[int, list[str]] = {}
        for s in samples:
            by_count.setdefault(s.n_replicates, []).append(s.model_id)
        detail = ", ".join(f"B={b}: {ids[:3]}" for b, ids in sorted(by_count.items()))
        raise LengthMismatchError(f"bootstrap replicate counts differ across models ({detail})")
    return counts.pop()


def summarize_pool(
    samples: Sequence[BootstrapSample],
    quantiles: tuple[float, float] = (5.0, 95.0),
) -> dict[str, Aggregate]:
    """Aggregate every model in one vectorized pass.

    The pool stacks into a (models x B) matrix since B is shared; each row is
    reduced exactly as summarize() would reduce it alone.
    """
    b = check_replicate_count(samples)
    ids = [s.model_id for s in samples]

    values = np.vstack([s.values for s in samples]) if b else np.empty((len(samples), 0))
    coverage = np.vstack([s.coverage_fraction for s in samples]) if b else np.empty((len(samples), 0))
    covered = np.vstack([s.covered_count for s in samples]) if b else np.empty((len(samples), 0))

    if b == 0:
        nan = float("nan")
        return {
            mid: Aggregate(mid, nan, nan, nan, nan, nan, False)
            for mid in ids
        }

    means = _quiet_nan(np.nanmean, values, axis=1)
    qs = _quiet_nan(np.nanpercentile, values, list(quantiles), axis=1, method="linear")
    cov_means = _quiet_nan(np.nanmean, coverage, axis=1)
    mean_covered = np.mean(covered, axis=1)
    any_cov = np.any(np.nan_to_num(coverage, nan=0.0) != 0.0, axis=1)

    return {
        mid: Aggregate(
            model_id=mid,
            mean=float(means[i]),
            q05=float(qs[0, i]),
            q95=float(qs[1, i]),
            coverage=float(cov_means[i]),
            mean_covered=float(mean_covered[i]),
            any_coverage=bool(any_cov[i]),
        )
        for i, mid in enumerate(ids)
    }
