"""Core type definitions for cafarank."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

import numpy as np

from cafarank.core.errors import ContractViolation, LengthMismatchError, MalformedIdentifierError


class Qualification(str, Enum):
    """Qualification type of a roster entry, keyed by its one-letter code."""
    QUALIFIED = "q"
    DISQUALIFIED = "d"
    REFERENCE1 = "n"
    REFERENCE2 = "b"

    @property
    def is_reference(self) -> bool:
        return self in (Qualification.REFERENCE1, Qualification.REFERENCE2)


def parse_variant(external_id: str) -> str:
    """Return the second '-'-delimited segment of an external identifier.

    >>> parse_variant("TEAM42-2")
    '2'
    """
    parts = external_id.split("-")
    if len(parts) < 2 or not parts[1]:
        raise MalformedIdentifierError(
            f"external id {external_id!r} has no variant segment (expected '<team>-<n>')"
        )
    return parts[1]


@dataclass(frozen=True)
class ModelRecord:
    """One roster row, resolved for a single internal model id."""
    internal_id: str
    external_id: str
    group_key: str
    display_name: str
    qualification: Qualification
    team_name: str = ""

    @property
    def variant(self) -> str:
        return parse_variant(self.external_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "internal_id": self.internal_id,
            "external_id": self.external_id,
            "team_name": self.team_name,
            "group_key": self.group_key,
            "display_name": self.display_name,
            "qualification": self.qualification.value,
        }


def _as_vector(values: Sequence[Optional[float]]) -> np.ndarray:
    # None shows up for missing replicates in decoded JSON
    return np.asarray([np.nan if v is None else v for v in values], dtype=float)


@dataclass(frozen=True, eq=False)
class BootstrapSample:
    """Replicate vectors of one model, aligned by replicate index.

    All three vectors must have the same length B.
    """
    model_id: str
    values: np.ndarray
    coverage_fraction: np.ndarray
    covered_count: np.ndarray

    def __post_init__(self) -> None:
        for name in ("values", "coverage_fraction", "covered_count"):
            arr = _as_vector(getattr(self, name))
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)
        lengths = {len(self.values), len(self.coverage_fraction), len(self.covered_count)}
        if len(lengths) != 1:
            raise LengthMismatchError(
                f"model {self.model_id!r}: replicate vectors differ in length "
                f"(values={len(self.values)}, coverage_fraction={len(self.coverage_fraction)}, "
                f"covered_count={len(self.covered_count)})"
            )

    @property
    def n_replicates(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class TermMetricRecord:
    """Per-term scores (e.g. AUC) of one model. A NaN score means no prediction."""
    model_id: str
    score_per_term: Mapping[str, float] = field(default_factory=dict)

    @property
    def terms(self) -> frozenset[str]:
        return frozenset(self.score_per_term)

    @classmethod
    def from_lists(cls, model_id: str, terms: Sequence[str], scores: Sequence[Optional[float]]) -> "TermMetricRecord":
        if len(terms) != len(scores):
            raise LengthMismatchError(
                f"model {model_id!r}: {len(terms)} terms but {len(scores)} scores"
            )
        if len(set(terms)) != len(terms):
            dupes = sorted(t for t, n in Counter(terms).items() if n > 1)
            raise ContractViolation(f"model {model_id!r}: duplicate term ids {dupes[:5]}")
        return cls(model_id=model_id, score_per_term=dict(zip(terms, _as_vector(scores).tolist())))


def _jsonable(x: float) -> Optional[float]:
    return None if math.isnan(x) else float(x)


@dataclass(frozen=True)
class SummaryBar:
    """Point estimate and 5/95 interval of one model, ready for plotting."""
    mean: float
    q05: float
    q95: float
    coverage: float
    tag: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "mean": _jsonable(self.mean),
            "q05": _jsonable(self.q05),
            "q95": _jsonable(self.q95),
            "coverage": _jsonable(self.coverage),
            "tag": self.tag,
        }


@dataclass(frozen=True)
class SelectionResult:
    """Leaderboard selection plus the two reference bars and audit lists."""
    selected: tuple[SummaryBar, ...]
    baselines: tuple[SummaryBar, SummaryBar]
    all_qualified_ids: tuple[str, ...]
    selected_ids: tuple[str, ...]
    k: int

    @property
    def shortfall(self) -> int:
        return max(self.k - len(self.selected), 0)

    @property
    def degraded(self) -> bool:
        """True when fewer than k distinct groups qualified."""
        return self.shortfall > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "selected": [b.to_dict() for b in self.selected],
            "baselines": [b.to_dict() for b in self.baselines],
            "all_qualified_ids": list(self.all_qualified_ids),
            "selected_ids": list(self.selected_ids),
            "k": self.k,
            "degraded": self.degraded,
            "shortfall": self.shortfall,
        }
