"""Exceptions raised by the leadgen services."""

from typing import Dict, List


class LeadgenError(Exception):
    """Base class for all leadgen errors."""


class ConfigurationError(LeadgenError):
    """Missing credentials, endpoints or providers. Raised at construction."""


class ValidationError(LeadgenError):
    """Request rejected before any I/O (missing id, empty list, blank name)."""


class SequenceNotFoundError(LeadgenError):
    def __init__(self, sequence_id: str):
        super().__init__(f"Sequence not found: {sequence_id}")
        self.sequence_id = sequence_id


class SequenceHasNoStepsError(LeadgenError):
    def __init__(self, sequence_id: str):
        super().__init__(f"Sequence has no steps: {sequence_id}")
        self.sequence_id = sequence_id


class BulkUpsertError(LeadgenError):
    """
    Some documents of an unordered bulk upsert failed.

    Documents that succeeded stay written; `ids` holds their ids and
    `failures` maps the batch position of each failed document to its error.
    """

    def __init__(self, ids: List[str], failures: Dict[int, str]):
        super().__init__(
            f"{len(failures)} of {len(ids) + len(failures)} documents failed to upsert"
        )
        self.ids = ids
        self.failures = failures
