"""Curation-and-ranking engine: quality filters, aggregation, selection."""

from cafarank.core.aggregate import Aggregate, nan_mean, nan_quantiles, summarize, summarize_pool
from cafarank.core.errors import (
    ContractViolation,
    CurationError,
    EmptyInputError,
    LengthMismatchError,
    MalformedIdentifierError,
    MissingReferenceError,
    UnknownModelError,
)
from cafarank.core.filters import drop_if, is_uninformative_auc, select_valid_term_auc
from cafarank.core.selector import Candidate, extract_references, select_distinct_groups, select_top_k
from cafarank.core.types import (
    BootstrapSample,
    ModelRecord,
    Qualification,
    SelectionResult,
    SummaryBar,
    TermMetricRecord,
    parse_variant,
)

__all__ = [
    "Aggregate",
    "BootstrapSample",
    "Candidate",
    "ContractViolation",
    "CurationError",
    "EmptyInputError",
    "LengthMismatchError",
    "MalformedIdentifierError",
    "MissingReferenceError",
    "ModelRecord",
    "Qualification",
    "SelectionResult",
    "SummaryBar",
    "TermMetricRecord",
    "UnknownModelError",
    "drop_if",
    "extract_references",
    "is_uninformative_auc",
    "nan_mean",
    "nan_quantiles",
    "parse_variant",
    "select_distinct_groups",
    "select_top_k",
    "select_valid_term_auc",
    "summarize",
    "summarize_pool",
]
