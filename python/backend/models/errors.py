"""Exceptions raised by the puzzle backend."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for every error raised by the backend."""


class InvalidImageError(PuzzleError):
    """The source picture is missing, undecodable, or too small to slice."""


class InternalInconsistencyError(PuzzleError):
    """The tile positions no longer describe a valid grid.

    Only a bug in state mutation can cause this; the session using the
    state must not continue.
    """


class InvalidTransitionError(PuzzleError, ValueError):
    """A navigation event that the current screen does not accept."""
