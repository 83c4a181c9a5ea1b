"""cafarank: curation and ranking of bootstrapped benchmark results."""

from cafarank.config import CurationConfig, CurationRunConfig, ReferenceIds
from cafarank.core import (
    BootstrapSample,
    ContractViolation,
    CurationError,
    ModelRecord,
    Qualification,
    SelectionResult,
    SummaryBar,
    TermMetricRecord,
    select_top_k,
    select_valid_term_auc,
)
from cafarank.roster import Roster, RosterError
from cafarank import leaderboard, reporting

__version__ = "0.1.0"

__all__ = [
    "CurationConfig",
    "CurationRunConfig",
    "ReferenceIds",
    "BootstrapSample",
    "ContractViolation",
    "CurationError",
    "ModelRecord",
    "Qualification",
    "SelectionResult",
    "SummaryBar",
    "TermMetricRecord",
    "select_top_k",
    "select_valid_term_auc",
    "Roster",
    "RosterError",
    "leaderboard",
    "reporting",
]
