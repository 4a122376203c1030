"""Youden plot computations for inter-laboratory comparisons.

Submodules
----------
config
    Validated run configuration (significance level, labels, verbosity).
core
    Manhattan median, error decomposition, confidence circle sizing and
    laboratory classification.
errors
    Exception types raised on invalid input.
result
    Immutable result records consumed by presentation code.
schema
    Column names for the tabular view of a result.
"""

from __future__ import annotations

from youden.config import YoudenConfig
from youden.core import (
    classify,
    confidence_circle,
    decompose_errors,
    manhattan_median,
    run_youden,
    youden_plot,
)
from youden.errors import InsufficientDataError, InvalidInputError, YoudenError
from youden.result import (
    Classification,
    ConfidenceCircle,
    ErrorCategory,
    ErrorDecomposition,
    ManhattanMedian,
    YoudenResult,
)

__all__ = [
    "Classification",
    "ConfidenceCircle",
    "ErrorCategory",
    "ErrorDecomposition",
    "InsufficientDataError",
    "InvalidInputError",
    "ManhattanMedian",
    "YoudenConfig",
    "YoudenError",
    "YoudenResult",
    "classify",
    "confidence_circle",
    "decompose_errors",
    "manhattan_median",
    "run_youden",
    "youden_plot",
]
