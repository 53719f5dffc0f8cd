"""
PageRank Exception Hierarchy

Standardized exceptions for the PageRank engine.

Usage guide:
    1. Capacity exhausted -> CapacityError (recoverable, engine stays usable)
    2. Bad arguments      -> InvalidParameterError (also a ValueError)

Example:
    try:
        engine.link(from_key, to_key)
    except CapacityError as e:
        logger.warning("link_rejected", index=e.index, capacity=e.capacity)
"""

from typing import Any


class PageRankError(Exception):
    """Base exception for all PageRank errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize PageRank error.

        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class CapacityError(PageRankError):
    """A new node would need an index beyond the configured capacity."""

    def __init__(self, index: int, capacity: int):
        message = f"Exceeded the capacity of nodes, current available index: {index}, capacity: {capacity}"
        super().__init__(message)
        self.index = index
        self.capacity = capacity

    def __str__(self) -> str:
        return self.message


class InvalidParameterError(PageRankError, ValueError):
    """Invalid constructor or ranking argument."""

    def __init__(self, parameter: str, value: Any, reason: str):
        super().__init__(
            f"Invalid {parameter}: {reason}",
            details={"parameter": parameter, "value": value},
        )
        self.parameter = parameter
        self.value = value
