"""Leaderboard runs from files on disk.

Glues the roster and statistics readers to the core selector and flattens a
``SelectionResult`` into ranked rows for reports and the CLI.
"""

from __future__ import annotations

from typing import Any, Optional

from cafarank.config import CurationRunConfig
from cafarank.core.errors import ContractViolation
from cafarank.core.selector import select_top_k
from cafarank.core.types import SelectionResult
from cafarank.roster import Roster
from cafarank.utils.logging import get_logger
from cafarank.utils.stats_io import load_bootstrap_stats

logger = get_logger("leaderboard")


def run_curation(config: CurationRunConfig) -> SelectionResult:
    """Load the roster and bootstrap statistics named by ``config`` and select."""
    if not config.roster_path or not config.stats_path:
        raise ContractViolation("CurationRunConfig requires roster_path and stats_path")
    roster = Roster.from_file(config.roster_path)
    samples = load_bootstrap_stats(config.stats_path)
    logger.info("curating %d models (%d bootstrap replicates)", len(samples), samples[0].n_replicates)
    return select_top_k(samples, roster, config.references, config.curation)


def leaderboard_rows(result: SelectionResult, include_baselines: bool = True) -> list[dict[str, Any]]:
    """
    Flatten a selection into display rows.
    
    Selected models are ranked 1..n in selection order; references follow with
    ``rank`` set to None and ``baseline`` set to True.
    """
    rows: list[dict[str, Any]] = []
    for rank, (mid, bar) in enumerate(zip(result.selected_ids, result.selected), 1):
        rows.append({"rank": rank, "model_id": mid, "baseline": False, **bar.to_dict()})
    if include_baselines:
        for bar in result.baselines:
            rows.append({"rank": None, "model_id": None, "baseline": True, **bar.to_dict()})
    return rows


def format_score(value: Optional[float], digits: int = 3) -> str:
    if value is None:
        return "NaN"
    return f"{value:.{digits}f}"
