"""Canonical configuration models for cafarank.

Curation policy values (leaderboard size, coverage threshold, the AUC
no-discrimination value) live here rather than as literals in the engine so
a run can record exactly which policy produced its leaderboard.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


DEFAULT_TOP_K = 10
DEFAULT_MIN_COVERED = 10.0
BASELINE_MARKER = "B"
NO_DISCRIMINATION_AUC = 0.5


class CurationConfig(BaseModel):
    """Policy knobs of the quality filter, aggregator and selector."""

    top_k: int = Field(default=DEFAULT_TOP_K, ge=1)
    min_covered: float = Field(default=DEFAULT_MIN_COVERED, ge=0.0)
    baseline_marker: str = BASELINE_MARKER
    no_discrimination_auc: float = NO_DISCRIMINATION_AUC
    higher_is_better: bool = False

    lower_quantile: float = Field(default=5.0, ge=0.0, le=100.0)
    upper_quantile: float = Field(default=95.0, ge=0.0, le=100.0)

    @field_validator("baseline_marker")
    @classmethod
    def _non_empty_marker(cls, v: str) -> str:
        if not v:
            raise ValueError("baseline_marker must be non-empty")
        return v

    @model_validator(mode="after")
    def _ordered_quantiles(self) -> "CurationConfig":
        if self.lower_quantile >= self.upper_quantile:
            raise ValueError("lower_quantile must be below upper_quantile")
        return self


class ReferenceIds(BaseModel):
    """Internal ids of the two reference models, by role."""

    naive: str
    blast: str

    @model_validator(mode="after")
    def _distinct(self) -> "ReferenceIds":
        if not self.naive or not self.blast:
            raise ValueError("reference ids must be non-empty")
        if self.naive == self.blast:
            raise ValueError("naive and blast references must be different models")
        return self

    def as_pair(self) -> tuple[str, str]:
        return (self.naive, self.blast)


class CurationRunConfig(BaseModel):
    """Canonical config for a single leaderboard run."""

    config_version: str = "0.1"

    roster_path: Optional[str] = None
    stats_path: Optional[str] = None

    references: ReferenceIds
    curation: CurationConfig = Field(default_factory=CurationConfig)
