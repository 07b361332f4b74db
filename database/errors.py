"""
Error types raised at the store boundary.
"""

from typing import List, Optional


class StoreError(RuntimeError):
    """The match/player store or the auth provider failed; the operation did not happen."""


class InvalidMatchDataError(ValueError):
    """A match cannot be saved because its data is incomplete or inconsistent."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class ConsolidationError(StoreError):
    """Duplicate consolidation stopped part-way through a group."""

    def __init__(self, message: str, normalized_name: str, step: str):
        super().__init__(message)
        self.normalized_name = normalized_name
        self.step = step
