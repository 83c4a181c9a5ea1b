"""Team roster: internal model id to external id, team, type, display name, PI.

The roster file holds one model per line with six columns::

    <internalID> <externalID> <teamname> <type> <displayname> <pi>

Columns are tab-separated when the line contains a tab (so display names may
contain spaces), otherwise whitespace-separated. Blank lines and lines
starting with ``#`` are skipped. ``type`` is one of ``q`` (qualified),
``d`` (disqualified), ``n`` (naive reference) or ``b`` (BLAST reference).
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Iterable, Iterator, Optional

from cafarank.core.errors import ContractViolation
from cafarank.core.types import ModelRecord, Qualification
from cafarank.utils.logging import get_logger

logger = get_logger("roster")

ROSTER_COLUMNS = ("internal_id", "external_id", "team_name", "type", "display_name", "pi")


class RosterError(ContractViolation):
    """The roster file is malformed."""


def _split(line: str) -> list[str]:
    if "\t" in line:
        return [c.strip() for c in line.split("\t")]
    return line.split()


def parse_roster_line(line: str, lineno: int = 0) -> Optional[ModelRecord]:
    """Parse one roster line; None for blank and comment lines."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    cols = _split(stripped)
    if len(cols) != len(ROSTER_COLUMNS):
        raise RosterError(f"line {lineno}: expected {len(ROSTER_COLUMNS)} columns, got {len(cols)}")
    internal_id, external_id, team_name, type_code, display_name, pi = cols
    try:
        qualification = Qualification(type_code)
    except ValueError:
        raise RosterError(f"line {lineno}: unknown model type {type_code!r} (expected q, d, n or b)") from None
    return ModelRecord(
        internal_id=internal_id,
        external_id=external_id,
        group_key=pi,
        display_name=display_name,
        qualification=qualification,
        team_name=team_name,
    )


class Roster(Mapping):
    """Read-only lookup of roster rows keyed by internal model id."""

    def __init__(self, records: Iterable[ModelRecord]):
        self._records: dict[str, ModelRecord] = {}
        for rec in records:
            if rec.internal_id in self._records:
                raise RosterError(f"duplicate roster entry for model {rec.internal_id!r}")
            self._records[rec.internal_id] = rec

    def __getitem__(self, model_id: str) -> ModelRecord:
        return self._records[model_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def of_type(self, qualification: Qualification) -> list[ModelRecord]:
        return [r for r in self._records.values() if r.qualification is qualification]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Roster":
        records = []
        for lineno, line in enumerate(lines, 1):
            rec = parse_roster_line(line, lineno)
            if rec is not None:
                records.append(rec)
        return cls(records)

    @classmethod
    def from_file(cls, path: str | Path) -> "Roster":
        path = Path(path)
        roster = cls.from_lines(path.read_text(encoding="utf-8").splitlines())
        logger.info("loaded %d roster entries from %s", len(roster), path)
        return roster
