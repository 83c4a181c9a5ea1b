"""Quality filters: drop degenerate or disqualified model results.

Both instantiations share one shape, a drop-if-predicate over an ordered
collection of per-model records. Filtering is pure and keeps the relative
order of the survivors.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from cafarank.config import BASELINE_MARKER, DEFAULT_MIN_COVERED, NO_DISCRIMINATION_AUC, CurationConfig
from cafarank.core.aggregate import Aggregate
from cafarank.core.errors import EmptyInputError
from cafarank.core.types import TermMetricRecord
from cafarank.utils.logging import get_logger

logger = get_logger("filters")

T = TypeVar("T")


def drop_if(records: Iterable[T], predicate: Callable[[T], bool]) -> List[T]:
    """Return the records for which ``predicate`` is false, in input order."""
    return [r for r in records if not predicate(r)]


def is_uninformative_auc(
    record: TermMetricRecord,
    baseline_marker: str = BASELINE_MARKER,
    no_discrimination: float = NO_DISCRIMINATION_AUC,
) -> bool:
    """True when a model made no real prediction on any term.

    Placeholders whose id starts with ``baseline_marker`` always count as
    uninformative. A single term scoring away from ``no_discrimination`` keeps
    the whole model.
    """
    if record.model_id.startswith(baseline_marker):
        return True
    return all(
        math.isnan(score) or score == no_discrimination
        for score in record.score_per_term.values()
    )


def select_valid_term_auc(
    records: Sequence[TermMetricRecord],
    config: Optional[CurationConfig] = None,
) -> List[TermMetricRecord]:
    """Keep models whose term AUCs show at least one real prediction.

    The baseline marker and the no-discrimination value come from ``config``.
    """
    config = config or CurationConfig()
    if not records:
        raise EmptyInputError("term AUC collection is empty")

    def predicate(r: TermMetricRecord) -> bool:
        dropped = is_uninformative_auc(r, config.baseline_marker, config.no_discrimination_auc)
        if dropped:
            logger.debug("dropping %s: baseline placeholder or no informative term AUC", r.model_id)
        return dropped

    kept = drop_if(records, predicate)
    logger.info("term AUC filter kept %d of %d models", len(kept), len(records))
    return kept


def smin_exclusion_reason(agg: Aggregate, min_covered: float = DEFAULT_MIN_COVERED) -> str | None:
    """Why a qualified model is unfit for the Smin leaderboard, or None."""
    if not agg.any_coverage:
        return "zero coverage on every replicate"
    if agg.mean_covered < min_covered:
        return f"covers {agg.mean_covered:.1f} targets on average (< {min_covered:g})"
    if math.isnan(agg.mean):
        return "mean score is NaN"
    return None


def is_degenerate_smin(agg: Aggregate, min_covered: float = DEFAULT_MIN_COVERED) -> bool:
    reason = smin_exclusion_reason(agg, min_covered)
    if reason is not None:
        logger.debug("dropping %s: %s", agg.model_id, reason)
    return reason is not None
