"""Exceptions raised by the Youden plot computations."""

from __future__ import annotations


class YoudenError(ValueError):
    """Base class for errors raised while building a Youden plot."""


class InvalidInputError(YoudenError):
    """Raised when the data matrix, labels, or options are malformed."""


class InsufficientDataError(YoudenError):
    """Raised when there are too few laboratories to size the circle."""


__all__ = ["YoudenError", "InvalidInputError", "InsufficientDataError"]
