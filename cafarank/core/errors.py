"""Error taxonomy for curation runs.

Contract violations abort the whole batch. Per-model exclusions are not
errors and never surface here.
"""

from __future__ import annotations


class CurationError(ValueError):
    """Base class for all cafarank errors."""


class ContractViolation(CurationError):
    """Inputs break the contract of the engine; no partial result is produced."""


class MalformedIdentifierError(ContractViolation):
    """External identifier lacks the '-'-delimited variant segment."""


class LengthMismatchError(ContractViolation):
    """Bootstrap vectors disagree in length within or across records."""


class MissingReferenceError(ContractViolation):
    """A requested reference model is absent from the evaluation pool."""


class EmptyInputError(ContractViolation):
    """A collection that needs at least one record was empty."""


class UnknownModelError(ContractViolation):
    """A model id has no row in the roster, or appears twice in the pool."""
