"""Readers for precomputed bootstrap and term-AUC statistics files.

Records are validated with pydantic and converted into the core's
``BootstrapSample`` / ``TermMetricRecord`` types. ``null`` replicate values
decode as NaN.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from cafarank.core.errors import ContractViolation, EmptyInputError
from cafarank.core.types import BootstrapSample, TermMetricRecord

Replicates = List[Optional[float]]


class BootstrapStatsEntry(BaseModel):
    """One model's bootstrap replicates as stored on disk."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str = Field(validation_alias=AliasChoices("id", "model_id"))
    values: Replicates = Field(validation_alias=AliasChoices("smin_bst", "values"))
    coverage_fraction: Replicates = Field(validation_alias=AliasChoices("coverage_bst", "coverage_fraction"))
    covered_count: Replicates = Field(validation_alias=AliasChoices("ncovered_bst", "covered_count"))

    def to_sample(self) -> BootstrapSample:
        return BootstrapSample(
            model_id=self.model_id,
            values=self.values,
            coverage_fraction=self.coverage_fraction,
            covered_count=self.covered_count,
        )


class TermAucEntry(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str = Field(validation_alias=AliasChoices("id", "model_id"))
    term: List[str]
    auc: Replicates

    def to_record(self) -> TermMetricRecord:
        return TermMetricRecord.from_lists(self.model_id, self.term, self.auc)


def _records(data: Union[list, dict[str, Any]], key: str = "models") -> list:
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ContractViolation(f"expected a list of records or an object with a {key!r} list")
    return data


def parse_bootstrap_stats(data: Union[list, dict[str, Any]]) -> list[BootstrapSample]:
    rows = _records(data)
    if not rows:
        raise EmptyInputError("bootstrap statistics file contains no models")
    try:
        entries = [BootstrapStatsEntry.model_validate(r) for r in rows]
    except ValidationError as e:
        raise ContractViolation(f"invalid bootstrap statistics record: {e}") from e
    return [e.to_sample() for e in entries]


def load_bootstrap_stats(path: str | Path) -> list[BootstrapSample]:
    path = Path(path)
    return parse_bootstrap_stats(json.loads(path.read_text(encoding="utf-8")))


def parse_term_aucs(data: Union[list, dict[str, Any]]) -> list[TermMetricRecord]:
    rows = _records(data)
    if not rows:
        raise EmptyInputError("term AUC file contains no models")
    try:
        entries = [TermAucEntry.model_validate(r) for r in rows]
    except ValidationError as e:
        raise ContractViolation(f"invalid term AUC record: {e}") from e
    return [e.to_record() for e in entries]


def load_term_aucs(path: str | Path) -> list[TermMetricRecord]:
    path = Path(path)
    return parse_term_aucs(json.loads(path.read_text(encoding="utf-8")))
