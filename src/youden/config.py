"""Validated configuration for a Youden plot run.

All arguments are checked eagerly here, at the boundary, so that the
computational stages in :mod:`youden.core` can assume well-formed input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Hashable, Optional, Sequence, Tuple

import numpy as np

from youden.errors import InsufficientDataError, InvalidInputError
from youden.schema import DEFAULT_ALPHA


@dataclass(frozen=True)
class YoudenConfig:
    """Options controlling a Youden plot computation.

    Parameters
    ----------
    alpha:
        Significance level of the confidence circle, strictly inside
        ``(0, 1)``. The circle covers ``(1 - alpha) * 100`` percent of
        laboratories affected only by random error. Default: ``0.05``.
    labels:
        Optional group label per laboratory. Labels are only used for
        identification and display; ``None`` means ``1..N``.
    verbose:
        When true, the report collaborator is invoked after the result has
        been computed. Default: ``True``.
    """

    alpha: float = DEFAULT_ALPHA
    labels: Optional[Tuple[Hashable, ...]] = None
    verbose: bool = True

    @classmethod
    def build(
        cls,
        *,
        alpha: object = DEFAULT_ALPHA,
        labels: Optional[Sequence[Hashable]] = None,
        verbose: object = True,
    ) -> "YoudenConfig":
        """Return a config after validating ``alpha`` and ``verbose``.

        Raises
        ------
        InvalidInputError
            If ``alpha`` is not a real number in ``(0, 1)`` or ``verbose``
            is not one of ``0``, ``1``, ``True`` or ``False``.
        """

        label_tuple = None if labels is None else _as_label_tuple(labels)
        return cls(
            alpha=validate_alpha(alpha),
            labels=label_tuple,
            verbose=validate_verbose(verbose),
        )

    def resolve_labels(self, n_rows: int) -> Tuple[Hashable, ...]:
        """Return the labels for ``n_rows`` laboratories.

        Raises
        ------
        InvalidInputError
            If explicit labels were given and their count differs from
            ``n_rows``.
        """

        if self.labels is None:
            return tuple(range(1, n_rows + 1))
        if len(self.labels) != n_rows:
            raise InvalidInputError(
                f"Label vector has {len(self.labels)} entries but the data "
                f"matrix has {n_rows} rows; they must match."
            )
        return self.labels


def validate_alpha(alpha: object) -> float:
    """Return ``alpha`` as a float after checking it lies in ``(0, 1)``."""

    if isinstance(alpha, bool) or not isinstance(alpha, (Real, np.floating)):
        raise InvalidInputError(
            f"Significance level alpha must be a real number, got {alpha!r}."
        )
    value = float(alpha)
    if not math.isfinite(value) or not 0.0 < value < 1.0:
        raise InvalidInputError(
            f"Significance level alpha must be strictly between 0 and 1, "
            f"got {value!r}."
        )
    return value


def validate_verbose(verbose: object) -> bool:
    """Return ``verbose`` as a bool; only ``0``/``1`` style flags are valid."""

    if isinstance(verbose, (bool, np.bool_)):
        return bool(verbose)
    if isinstance(verbose, Real) and verbose in (0, 1):
        return bool(verbose)
    raise InvalidInputError(f"Verbose flag must be 0 or 1, got {verbose!r}.")


def coerce_data_matrix(data: object) -> np.ndarray:
    """Return ``data`` as a float array of shape ``(N, 2)``.

    Checks run in a fixed order so the error message names the first
    constraint that failed: numeric, real, non-empty, two columns, finite.

    Raises
    ------
    InvalidInputError
        If any of the constraints above is violated.
    """

    try:
        raw = np.asarray(data)
    except (TypeError, ValueError) as err:
        raise InvalidInputError(f"Data matrix is not numeric: {err}") from err

    if np.iscomplexobj(raw):
        raise InvalidInputError("Data matrix must contain real values only.")
    if raw.dtype == object or not (
        np.issubdtype(raw.dtype, np.number) or np.issubdtype(raw.dtype, np.bool_)
    ):
        raise InvalidInputError(
            f"Data matrix must be numeric, got dtype {raw.dtype}."
        )
    if raw.size == 0:
        raise InvalidInputError("Data matrix is empty.")
    if raw.ndim != 2 or raw.shape[1] != 2:
        raise InvalidInputError(
            f"Data matrix must have shape (N, 2), got {raw.shape}."
        )

    matrix = raw.astype(float)
    if not np.all(np.isfinite(matrix)):
        raise InvalidInputError("Data matrix contains NaN or infinite values.")
    return matrix


def check_observation_count(n_rows: int) -> int:
    """Return the degrees of freedom ``n_rows - 1``, requiring at least 1."""

    dof = n_rows - 1
    if dof < 1:
        raise InsufficientDataError(
            f"At least 2 laboratories are required, got {n_rows}."
        )
    return dof


def _as_label_tuple(labels: Sequence[Hashable]) -> Tuple[Hashable, ...]:
    """Return ``labels`` flattened into a tuple."""

    if isinstance(labels, (str, bytes)):
        raise InvalidInputError("Labels must be a sequence, not a single string.")
    if isinstance(labels, np.ndarray):
        values = tuple(labels.ravel().tolist())
    else:
        try:
            values = tuple(labels)
        except TypeError as err:
            raise InvalidInputError(f"Labels must be a sequence: {err}") from err
    for position, label in enumerate(values):
        try:
            hash(label)
        except TypeError as err:
            raise InvalidInputError(
                f"Label {label!r} at position {position} is not hashable."
            ) from err
    return values


__all__ = [
    "YoudenConfig",
    "check_observation_count",
    "coerce_data_matrix",
    "validate_alpha",
    "validate_verbose",
]
