"""
BrewTracker IDs — Exception types raised on direct (non-interceptor) call paths.
"""

from __future__ import annotations


class IdNormalizationError(ValueError):
    """An entity could not be normalized: not a dict, or no identifier found."""

    def __init__(self, message: str, entity_type: str | None = None) -> None:
        super().__init__(message)
        self.entity_type = entity_type
