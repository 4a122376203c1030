"""Immutable records produced by the Youden plot computation.

The records hold plain numpy arrays so that plotting and reporting code can
consume them without re-deriving any quantity.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Hashable, List, Tuple

import numpy as np
import pandas as pd

from youden.schema import (
    COLUMN_BETWEEN_TANGENTS,
    COLUMN_GROUP,
    COLUMN_INSIDE_CIRCLE,
    COLUMN_OUTSIDE_TANGENTS,
    COLUMN_RANDOM,
    COLUMN_SYSTEMATIC,
    COLUMN_TOTAL,
    COLUMN_X,
    COLUMN_Y,
    RESULT_COLUMNS,
)


class ErrorCategory(str, Enum):
    """Classification of a laboratory relative to the circle and tangents."""

    INSIDE_CIRCLE = "inside_circle"
    BETWEEN_TANGENTS = "between_tangents"
    OUTSIDE_TANGENTS = "outside_tangents"


@dataclass(frozen=True)
class ManhattanMedian:
    """Column-wise median of the two measurement series."""

    x: float
    y: float

    @property
    def offset(self) -> float:
        """Vertical offset ``dm`` of the precision line ``y = x + dm``."""

        return self.y - self.x

    def as_array(self) -> np.ndarray:
        """Return the median as a length-2 float array."""

        return np.array([self.x, self.y], dtype=float)

    def __str__(self) -> str:
        return f"{self.x:g} {self.y:g}"


@dataclass(frozen=True)
class ErrorDecomposition:
    """Per-laboratory split of the total error into two components.

    Parameters
    ----------
    total:
        Euclidean distance of each laboratory from the Manhattan median.
    random:
        Rescaled distance from each laboratory to its intercept on the
        precision line.
    systematic:
        Rescaled distance from the Manhattan median to that intercept.
    intercepts:
        ``(N, 2)`` array with the foot of the perpendicular dropped from each
        laboratory onto the precision line.
    """

    total: np.ndarray
    random: np.ndarray
    systematic: np.ndarray
    intercepts: np.ndarray


@dataclass(frozen=True)
class ConfidenceCircle:
    """Circle centred on the median sized from the random error component.

    Parameters
    ----------
    center:
        Manhattan median of the data.
    radius:
        Circle radius ``r = s * t(1 - alpha / 2, dof)``.
    sd:
        Degrees-of-freedom adjusted root mean square of the random error.
    dof:
        Degrees of freedom, ``N - 1``.
    alpha:
        Significance level used for the Student t quantile.
    """

    center: ManhattanMedian
    radius: float
    sd: float
    dof: int
    alpha: float

    @property
    def confidence(self) -> float:
        """Coverage of the circle in percent, ``(1 - alpha) * 100``."""

        return (1.0 - self.alpha) * 100.0

    @property
    def tangent_offset(self) -> float:
        """Vertical offset ``k`` of the tangents from the precision line."""

        return self.radius * math.sqrt(2.0)


@dataclass(frozen=True)
class Classification:
    """Partition of the laboratories into the three error categories."""

    inside_circle: np.ndarray
    between_tangents: np.ndarray
    outside_tangents: np.ndarray

    def categories(self) -> List[ErrorCategory]:
        """Return the category of every laboratory in input order."""

        labels: List[ErrorCategory] = []
        for inside, between in zip(self.inside_circle, self.between_tangents):
            if inside:
                labels.append(ErrorCategory.INSIDE_CIRCLE)
            elif between:
                labels.append(ErrorCategory.BETWEEN_TANGENTS)
            else:
                labels.append(ErrorCategory.OUTSIDE_TANGENTS)
        return labels

    def counts(self) -> Dict[str, int]:
        """Return the number of laboratories in each category."""

        return {
            ErrorCategory.INSIDE_CIRCLE.value: int(self.inside_circle.sum()),
            ErrorCategory.BETWEEN_TANGENTS.value: int(self.between_tangents.sum()),
            ErrorCategory.OUTSIDE_TANGENTS.value: int(self.outside_tangents.sum()),
        }


@dataclass(frozen=True)
class YoudenResult:
    """Everything a plotting or reporting collaborator needs.

    Parameters
    ----------
    data:
        ``(N, 2)`` float array of the paired measurements.
    labels:
        Group label of each laboratory.
    median:
        Manhattan median of ``data``.
    decomposition:
        Total, random and systematic error per laboratory.
    circle:
        Confidence circle derived from the random errors.
    classification:
        Category flags per laboratory.
    """

    data: np.ndarray
    labels: Tuple[Hashable, ...]
    median: ManhattanMedian
    decomposition: ErrorDecomposition
    circle: ConfidenceCircle
    classification: Classification

    @property
    def m(self) -> np.ndarray:
        return self.median.as_array()

    @property
    def dm(self) -> float:
        return self.median.offset

    @property
    def r(self) -> float:
        return self.circle.radius

    @property
    def s(self) -> float:
        return self.circle.sd

    @property
    def k(self) -> float:
        return self.circle.tangent_offset

    @property
    def confidence(self) -> float:
        return self.circle.confidence

    @property
    def stats(self) -> np.ndarray:
        """Return ``[total, random, systematic, inside, between, outside]``.

        The flags are stored as ``0.0``/``1.0`` so the matrix is a plain
        ``(N, 6)`` float array.
        """

        return np.column_stack(
            [
                self.decomposition.total,
                self.decomposition.random,
                self.decomposition.systematic,
                self.classification.inside_circle.astype(float),
                self.classification.between_tangents.astype(float),
                self.classification.outside_tangents.astype(float),
            ]
        )

    def to_frame(self) -> pd.DataFrame:
        """Return one row per laboratory with values and category flags."""

        frame = pd.DataFrame(
            {
                COLUMN_GROUP: list(self.labels),
                COLUMN_X: self.data[:, 0],
                COLUMN_Y: self.data[:, 1],
                COLUMN_TOTAL: self.decomposition.total,
                COLUMN_RANDOM: self.decomposition.random,
                COLUMN_SYSTEMATIC: self.decomposition.systematic,
                COLUMN_INSIDE_CIRCLE: self.classification.inside_circle,
                COLUMN_BETWEEN_TANGENTS: self.classification.between_tangents,
                COLUMN_OUTSIDE_TANGENTS: self.classification.outside_tangents,
            }
        )
        return frame[RESULT_COLUMNS]

    def summary(self) -> Dict[str, object]:
        """Return the scalar outputs as a JSON-friendly mapping."""

        return {
            "n": int(self.data.shape[0]),
            "m": [float(self.median.x), float(self.median.y)],
            "dm": float(self.dm),
            "s": float(self.s),
            "r": float(self.r),
            "k": float(self.k),
            "alpha": float(self.circle.alpha),
            "confidence": float(self.confidence),
            "dof": int(self.circle.dof),
            "counts": self.classification.counts(),
        }


__all__ = [
    "Classification",
    "ConfidenceCircle",
    "ErrorCategory",
    "ErrorDecomposition",
    "ManhattanMedian",
    "YoudenResult",
]
