"""Group-constrained leaderboard selection.

Qualified models are aggregated, filtered, ranked by mean score and walked
greedily: the first (best) model of each principal investigator takes the
group's single slot, later models of the same group are skipped. Reference
models bypass filtering and ranking and are reported alongside.

Every pool model must have a roster row. A model without one aborts the run
with UnknownModelError on purpose, instead of being skipped as if it were
unqualified: a missing row means a broken roster, not a disqualification.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from cafarank.config import CurationConfig, ReferenceIds
from cafarank.core.aggregate import Aggregate, summarize_pool
from cafarank.core.errors import (
    EmptyInputError,
    MissingReferenceError,
    UnknownModelError,
)
from cafarank.core.filters import drop_if, is_degenerate_smin
from cafarank.core.types import (
    BootstrapSample,
    ModelRecord,
    Qualification,
    SelectionResult,
    SummaryBar,
)
from cafarank.utils.logging import get_logger

logger = get_logger("selector")


@dataclass(frozen=True)
class Candidate:
    """A qualified model with its roster row and aggregated statistics."""

    record: ModelRecord
    aggregate: Aggregate
    tag: str

    @property
    def model_id(self) -> str:
        return self.record.internal_id

    @property
    def group_key(self) -> str:
        return self.record.group_key

    @property
    def score(self) -> float:
        return self.aggregate.mean

    def to_bar(self) -> SummaryBar:
        return to_bar(self.aggregate, self.tag)


def to_bar(agg: Aggregate, tag: str) -> SummaryBar:
    return SummaryBar(mean=agg.mean, q05=agg.q05, q95=agg.q95, coverage=agg.coverage, tag=tag)


def select_distinct_groups(
    candidates: Sequence[Candidate],
    k: int,
    higher_is_better: bool = False,
) -> List[Candidate]:
    """Pick up to ``k`` candidates, best score first, one per group key.

    The sort is stable, so equal scores keep their pool order. This is a single
    greedy pass: a skipped candidate is never reconsidered.
    """
    ranked = sorted(candidates, key=lambda c: -c.score if higher_is_better else c.score)
    used_groups: set[str] = set()
    picked: List[Candidate] = []
    for cand in ranked:
        if len(picked) == k:
            break
        if cand.group_key in used_groups:
            logger.debug("skipping %s: group %r already on the leaderboard", cand.model_id, cand.group_key)
            continue
        used_groups.add(cand.group_key)
        picked.append(cand)
    return picked


def _lookup(roster: Mapping[str, ModelRecord], model_id: str) -> ModelRecord:
    try:
        return roster[model_id]
    except KeyError:
        raise UnknownModelError(f"model {model_id!r} has no roster entry") from None


def extract_references(
    samples: Sequence[BootstrapSample],
    roster: Mapping[str, ModelRecord],
    references: ReferenceIds,
    aggregates: Optional[Mapping[str, Aggregate]] = None,
    quantiles: tuple[float, float] = (5.0, 95.0),
) -> tuple[SummaryBar, SummaryBar]:
    """Aggregate the naive and sequence-similarity references, in that order.

    References are tagged by display name alone and never filtered.
    """
    if aggregates is None:
        aggregates = summarize_pool(samples, quantiles)
    pool_ids = {s.model_id for s in samples}
    bars = []
    for role, mid in (("naive", references.naive), ("blast", references.blast)):
        if mid not in pool_ids:
            raise MissingReferenceError(f"{role} reference {mid!r} is not in the evaluation pool")
        bars.append(to_bar(aggregates[mid], _lookup(roster, mid).display_name))
    return bars[0], bars[1]


def _check_unique(samples: Sequence[BootstrapSample]) -> None:
    seen: set[str] = set()
    for s in samples:
        if s.model_id in seen:
            raise UnknownModelError(f"model {s.model_id!r} appears more than once in the pool")
        seen.add(s.model_id)


def select_top_k(
    samples: Sequence[BootstrapSample],
    roster: Mapping[str, ModelRecord],
    references: ReferenceIds,
    config: Optional[CurationConfig] = None,
) -> SelectionResult:
    """Build the leaderboard for one statistic (Smin by default).

    Args:
        samples: Bootstrap statistics of every evaluated model, pool order.
        roster: Internal model id to roster row.
        references: Which pool models are the two references.
        config: Curation policy; defaults to top 10, 10 covered targets.

    Returns:
        The selection; ``degraded`` is set when fewer than ``top_k`` groups
        qualified.
    """
    config = config or CurationConfig()
    if not samples:
        raise EmptyInputError("bootstrap statistics collection is empty")
    if not roster:
        raise EmptyInputError("roster is empty")
    _check_unique(samples)

    quantiles = (config.lower_quantile, config.upper_quantile)
    aggregates = summarize_pool(samples, quantiles)
    baselines = extract_references(samples, roster, references, aggregates, quantiles)

    reference_ids = set(references.as_pair())
    qualified: List[Candidate] = []
    for s in samples:
        if s.model_id in reference_ids:
            continue
        record = _lookup(roster, s.model_id)
        if record.qualification is not Qualification.QUALIFIED:
            continue
        # raises on a malformed external id before any filtering
        tag = f"{record.display_name}-{record.variant}"
        qualified.append(Candidate(record=record, aggregate=aggregates[s.model_id], tag=tag))

    pool = drop_if(qualified, lambda c: is_degenerate_smin(c.aggregate, config.min_covered))
    logger.info("%d of %d qualified models pass the quality filter", len(pool), len(qualified))

    picked = select_distinct_groups(pool, config.top_k, config.higher_is_better)
    result = SelectionResult(
        selected=tuple(c.to_bar() for c in picked),
        baselines=baselines,
        all_qualified_ids=tuple(c.model_id for c in pool),
        selected_ids=tuple(c.model_id for c in picked),
        k=config.top_k,
    )
    if result.degraded:
        logger.warning("only selected %d models (%d requested)", len(picked), config.top_k)
    return result
