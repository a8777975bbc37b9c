"""Errors surfaced by the tracking engine to its callers.

Only two outcomes ever reach a caller as errors: the order does not exist, or
the persistent store could not be read. Everything the dispatch provider does
degrades the result instead of failing it.
"""

from __future__ import annotations


class TrackingError(RuntimeError):
    """Base class for tracking engine errors."""


class OrderNotFoundError(TrackingError, LookupError):
    """Raised when no persistent order record matches a reference."""

    def __init__(self, reference: str, *, reason: str = "no_match") -> None:
        super().__init__(f"Order not found: {reference!r} ({reason})")
        self.reference = reference
        self.reason = reason


class TrackingUnavailableError(TrackingError):
    """Raised when the persistent store cannot be read (unreachable, timed out)."""
