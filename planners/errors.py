from __future__ import annotations


class PathfindingError(Exception):
    """Base class for every error raised by the planners package."""


class OutOfBoundsError(PathfindingError, ValueError):
    """Start or goal lies outside the grid's vertex range."""


class UnknownAlgorithmError(PathfindingError, ValueError):
    pass


class InvariantViolationError(PathfindingError, AssertionError):
    """
    The engine reached a state that should be impossible.

    Never raised for bad user input; callers should let it propagate.
    """


class BrokenChainError(InvariantViolationError):
    """A node on the parent chain (other than start) has no parent."""
