"""
Exceptions raised while building permalinks.
"""

from typing import Any, List, Optional


class PermalinkError(Exception):
    """Base class for all permalink errors."""


class CycleDetected(PermalinkError):
    """
    Raised when the ancestor chain of a record revisits an identifier.

    The partial path is never returned, because a truncated permalink
    would look valid while pointing somewhere else.
    """

    def __init__(self, record_id: Any, chain: List[Any]):
        self.record_id = record_id
        self.chain = list(chain)
        walked = " -> ".join(str(item) for item in self.chain)
        super().__init__(
            f"Cycle detected in parent chain: record {record_id!r} is its own ancestor ({walked} -> {record_id})"
        )


class ResolutionFailure(PermalinkError):
    """Raised by resolvers when the parent of a record cannot be fetched."""

    def __init__(self, message: str, record_id: Any = None, parent_id: Optional[Any] = None):
        self.record_id = record_id
        self.parent_id = parent_id
        super().__init__(message)


class PathBuildCancelled(PermalinkError):
    """Raised when the caller cancels a build between ancestor fetches."""
