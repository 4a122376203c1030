"""Youden plot error decomposition.

The computation runs four stages in order:

1. the Manhattan median of the two measurement columns;
2. the split of every laboratory's distance from the median into a random
   and a systematic component along the 45 degree precision line;
3. the confidence circle radius from the random components and a Student t
   quantile;
4. the classification of each laboratory against the circle and the two
   tangents parallel to the precision line.

Nothing here draws or prints. When ``verbose`` is set, a reporter callable
receives the finished :class:`~youden.result.YoudenResult`.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Hashable, Optional, Sequence

import numpy as np
from scipy import stats

from youden.config import (
    YoudenConfig,
    check_observation_count,
    coerce_data_matrix,
    validate_alpha,
)
from youden.result import (
    Classification,
    ConfidenceCircle,
    ErrorDecomposition,
    ManhattanMedian,
    YoudenResult,
)
from youden.schema import DEFAULT_ALPHA

LOGGER = logging.getLogger(__name__)

Reporter = Callable[[YoudenResult], None]


def manhattan_median(data: object) -> ManhattanMedian:
    """Return the column-wise median of an ``(N, 2)`` data matrix.

    Raises
    ------
    InvalidInputError
        If ``data`` is empty, non-numeric, non-finite or not two columns.
    """

    matrix = coerce_data_matrix(data)
    medians = np.median(matrix, axis=0)
    return ManhattanMedian(x=float(medians[0]), y=float(medians[1]))


def decompose_errors(data: np.ndarray, median: ManhattanMedian) -> ErrorDecomposition:
    """Split each laboratory's distance from ``median`` into two components.

    Parameters
    ----------
    data:
        Validated ``(N, 2)`` float array.
    median:
        Manhattan median of ``data``.

    Returns
    -------
    ErrorDecomposition
        Total, random and systematic error per row together with the
        intercept of each row on the precision line ``y = x + dm``.
    """

    center = median.as_array()
    half_offset = np.array([median.x - median.y, median.y - median.x]) / 2.0

    # Foot of the perpendicular from (x, y) onto y = x + dm.
    half_sum = data.sum(axis=1, keepdims=True) / 2.0
    intercepts = half_sum + half_offset

    total = np.sqrt(np.sum((data - center) ** 2, axis=1))
    raw_random = np.sqrt(np.sum((data - intercepts) ** 2, axis=1))
    raw_systematic = np.sqrt(np.sum((center - intercepts) ** 2, axis=1))

    # The perpendicular legs do not in general add up to the direct distance
    # from the median: they are not collinear contributions. Both legs are
    # rescaled proportionally so that random + systematic == total, giving a
    # consistent partition of the total error for reporting purposes. This
    # is a deliberate approximation, not a geometric identity.
    legs = raw_systematic + raw_random
    scale = np.zeros_like(total)
    np.divide(total, legs, out=scale, where=legs != 0.0)

    systematic = np.where(raw_systematic == 0.0, 0.0, raw_systematic * scale)
    random = np.where(raw_random == 0.0, 0.0, raw_random * scale)

    return ErrorDecomposition(
        total=total,
        random=random,
        systematic=systematic,
        intercepts=intercepts,
    )


def confidence_circle(
    random: Sequence[float],
    median: ManhattanMedian,
    alpha: float = DEFAULT_ALPHA,
) -> ConfidenceCircle:
    """Return the confidence circle sized from the random error components.

    The standard deviation of the random error is estimated as
    ``s = sqrt(sum(random**2) / (N - 1))``, treating the component as
    centred on zero, and scaled by the two-tailed Student t quantile
    ``t(1 - alpha / 2, N - 1)``.

    Raises
    ------
    InsufficientDataError
        If fewer than two random components are given.
    InvalidInputError
        If ``alpha`` is outside ``(0, 1)``.
    """

    values = np.asarray(random, dtype=float).ravel()
    dof = check_observation_count(values.size)
    alpha = validate_alpha(alpha)

    sd = math.sqrt(float(np.sum(values**2)) / dof)
    quantile = float(stats.t.ppf(1.0 - alpha / 2.0, dof))
    radius = sd * quantile
    return ConfidenceCircle(
        center=median,
        radius=radius,
        sd=sd,
        dof=dof,
        alpha=alpha,
    )


def classify(
    data: np.ndarray,
    total: np.ndarray,
    median: ManhattanMedian,
    radius: float,
) -> Classification:
    """Place every laboratory inside the circle, between or outside the tangents.

    A laboratory is inside the circle when its total error does not exceed
    ``radius``. Otherwise it is between the tangents when its own diagonal
    offset ``y - x`` lies within ``dm +/- radius * sqrt(2)``, bounds
    included, and outside the tangents in every remaining case.
    """

    k = radius * math.sqrt(2.0)
    dm = median.offset

    inside = np.asarray(total) <= radius
    delta = data[:, 1] - data[:, 0]
    between = ~inside & (delta <= dm + k) & (delta >= dm - k)
    outside = ~inside & ~between
    return Classification(
        inside_circle=inside,
        between_tangents=between,
        outside_tangents=outside,
    )


def run_youden(
    data: object,
    config: Optional[YoudenConfig] = None,
    reporter: Optional[Reporter] = None,
) -> YoudenResult:
    """Run the full Youden computation with an explicit configuration.

    All validation happens before any stage runs, so a failure never leaves
    a partial result behind.

    Parameters
    ----------
    data:
        Array-like of shape ``(N, 2)`` with the paired measurements.
    config:
        Validated options; defaults to :class:`YoudenConfig` defaults.
    reporter:
        Callable invoked with the result when ``config.verbose`` is true.
        When omitted, the report table is written to the module logger.

    Raises
    ------
    InvalidInputError
        If the matrix or the labels are malformed.
    InsufficientDataError
        If fewer than two laboratories are given.
    """

    config = config or YoudenConfig()
    matrix = coerce_data_matrix(data)
    labels = config.resolve_labels(matrix.shape[0])
    check_observation_count(matrix.shape[0])

    median = manhattan_median(matrix)
    decomposition = decompose_errors(matrix, median)
    circle = confidence_circle(decomposition.random, median, config.alpha)
    classification = classify(matrix, decomposition.total, median, circle.radius)

    result = YoudenResult(
        data=matrix,
        labels=labels,
        median=median,
        decomposition=decomposition,
        circle=circle,
        classification=classification,
    )
    LOGGER.debug(
        "Youden plot for %d laboratories: m=(%g, %g), s=%g, r=%g",
        matrix.shape[0],
        median.x,
        median.y,
        circle.sd,
        circle.radius,
    )

    if config.verbose:
        (reporter or log_report)(result)
    return result


def youden_plot(
    data: object,
    labels: Optional[Sequence[Hashable]] = None,
    alpha: float = DEFAULT_ALPHA,
    verbose: object = True,
    reporter: Optional[Reporter] = None,
) -> YoudenResult:
    """Validate the options and run :func:`run_youden`.

    Parameters
    ----------
    data:
        ``(N, 2)`` matrix; column 1 is the first measurement and column 2
        the second measurement of each laboratory.
    labels:
        Optional group label per row, used only for identification.
        Default: ``1..N``.
    alpha:
        Significance level of the confidence circle. Default: ``0.05``.
    verbose:
        ``1``/``True`` to invoke ``reporter`` after computing, ``0``/``False``
        to suppress it.
    reporter:
        Report collaborator; see :func:`run_youden`.
    """

    config = YoudenConfig.build(alpha=alpha, labels=labels, verbose=verbose)
    return run_youden(data, config, reporter=reporter)


def log_report(result: YoudenResult) -> None:
    """Write the per-laboratory table of ``result`` to the module logger."""

    LOGGER.info(
        "Manhattan median: %s; %g%% circle radius %g",
        result.median,
        result.confidence,
        result.r,
    )
    LOGGER.info("%s", result.to_frame().to_string(index=False))


__all__ = [
    "classify",
    "confidence_circle",
    "decompose_errors",
    "log_report",
    "manhattan_median",
    "run_youden",
    "youden_plot",
]
