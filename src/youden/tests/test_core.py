"""
Tests for the Youden plot computation stages.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from youden.config import YoudenConfig
from youden.core import (
    classify,
    confidence_circle,
    decompose_errors,
    manhattan_median,
    run_youden,
    youden_plot,
)
from youden.errors import InsufficientDataError, InvalidInputError
from youden.result import ErrorCategory, ManhattanMedian

LAB_DATA = np.array(
    [
        [12.1, 11.8],
        [11.6, 11.9],
        [12.4, 12.6],
        [11.2, 11.0],
        [12.0, 12.3],
        [13.9, 11.1],
        [12.8, 13.4],
        [10.1, 10.2],
        [11.9, 12.0],
        [12.2, 11.7],
    ]
)


def test_manhattan_median_uses_column_medians() -> None:
    """The median should be computed independently for each column."""

    median = manhattan_median([[1.0, 9.0], [2.0, 7.0], [10.0, 8.0]])

    assert median == ManhattanMedian(x=2.0, y=8.0)
    assert median.offset == pytest.approx(6.0)


def test_manhattan_median_half_count_property() -> None:
    """At least ceil(N/2) values should sit on each side of each coordinate."""

    median = manhattan_median(LAB_DATA)
    n_half = math.ceil(LAB_DATA.shape[0] / 2)

    for column, value in enumerate((median.x, median.y)):
        values = LAB_DATA[:, column]
        assert np.sum(values <= value) >= n_half
        assert np.sum(values >= value) >= n_half


def test_decomposition_components_sum_to_total() -> None:
    """Rescaled random and systematic errors should add up to the total."""

    median = manhattan_median(LAB_DATA)
    decomposition = decompose_errors(LAB_DATA, median)

    np.testing.assert_allclose(
        decomposition.random + decomposition.systematic,
        decomposition.total,
        rtol=1e-9,
        atol=0.0,
    )
    expected_total = np.hypot(LAB_DATA[:, 0] - median.x, LAB_DATA[:, 1] - median.y)
    np.testing.assert_allclose(decomposition.total, expected_total)


def test_intercepts_lie_on_precision_line() -> None:
    """Each intercept should satisfy y = x + dm and be the closest point."""

    median = manhattan_median(LAB_DATA)
    decomposition = decompose_errors(LAB_DATA, median)
    intercepts = decomposition.intercepts

    np.testing.assert_allclose(
        intercepts[:, 1] - intercepts[:, 0],
        np.full(LAB_DATA.shape[0], median.offset),
    )
    # The residual from the point to its intercept is normal to (1, 1).
    residual = LAB_DATA - intercepts
    np.testing.assert_allclose(residual.sum(axis=1), 0.0, atol=1e-12)


def test_decomposition_rescales_perpendicular_legs() -> None:
    """A single off-diagonal point should have legs scaled to its distance."""

    data = np.array([[0.0, 0.0], [0.0, 0.0], [2.0, 0.0]])
    median = manhattan_median(data)
    decomposition = decompose_errors(data, median)

    # Raw legs for (2, 0) are both sqrt(2); the total distance is 2.
    assert decomposition.total[2] == pytest.approx(2.0)
    assert decomposition.random[2] == pytest.approx(1.0)
    assert decomposition.systematic[2] == pytest.approx(1.0)
    np.testing.assert_allclose(decomposition.intercepts[2], [1.0, 1.0])


def test_point_on_median_has_zero_components() -> None:
    """A laboratory sitting on the median should not produce NaN values."""

    data = np.array([[5.0, 5.0], [4.0, 6.0], [6.0, 4.0]])
    median = manhattan_median(data)
    decomposition = decompose_errors(data, median)

    assert decomposition.total[0] == 0.0
    assert decomposition.random[0] == 0.0
    assert decomposition.systematic[0] == 0.0
    assert np.all(np.isfinite(decomposition.random))
    assert np.all(np.isfinite(decomposition.systematic))


def test_confidence_circle_uses_student_quantile() -> None:
    """The radius should be the RMS random error times the t quantile."""

    median = ManhattanMedian(x=0.0, y=0.0)
    circle = confidence_circle([1.0, 2.0, 2.0], median, alpha=0.05)

    # sqrt((1 + 4 + 4) / 2) with the 97.5% quantile for 2 dof.
    assert circle.sd == pytest.approx(math.sqrt(4.5))
    assert circle.dof == 2
    assert circle.radius == pytest.approx(math.sqrt(4.5) * 4.302652729911275)
    assert circle.confidence == pytest.approx(95.0)
    assert circle.tangent_offset == pytest.approx(circle.radius * math.sqrt(2.0))


def test_radius_shrinks_as_alpha_grows() -> None:
    """A larger significance level should never widen the circle."""

    median = manhattan_median(LAB_DATA)
    decomposition = decompose_errors(LAB_DATA, median)
    radii = [
        confidence_circle(decomposition.random, median, alpha).radius
        for alpha in (0.001, 0.01, 0.05, 0.1, 0.2, 0.5, 0.9)
    ]

    assert all(later <= earlier for earlier, later in zip(radii, radii[1:]))


def test_confidence_circle_requires_two_values() -> None:
    """One random component leaves no degrees of freedom."""

    with pytest.raises(InsufficientDataError):
        confidence_circle([0.5], ManhattanMedian(x=0.0, y=0.0))


def test_classification_partitions_laboratories() -> None:
    """Each laboratory should carry exactly one category flag."""

    result = youden_plot(LAB_DATA, verbose=0)
    flags = np.column_stack(
        [
            result.classification.inside_circle,
            result.classification.between_tangents,
            result.classification.outside_tangents,
        ]
    )

    assert np.all(flags.sum(axis=1) == 1)
    assert sum(result.classification.counts().values()) == LAB_DATA.shape[0]


def test_classify_regions() -> None:
    """Points should land in the circle, the tangent band or outside it."""

    data = np.array([[0.5, 0.5], [3.0, 3.5], [3.0, 0.0]])
    median = ManhattanMedian(x=0.0, y=0.0)
    total = np.hypot(data[:, 0], data[:, 1])
    classification = classify(data, total, median, radius=1.0)

    assert classification.categories() == [
        ErrorCategory.INSIDE_CIRCLE,
        ErrorCategory.BETWEEN_TANGENTS,
        ErrorCategory.OUTSIDE_TANGENTS,
    ]


def test_identical_rows_all_inside_circle() -> None:
    """Four identical laboratories collapse onto the median."""

    result = youden_plot([[10, 10], [10, 10], [10, 10], [10, 10]], verbose=0)

    assert result.median == ManhattanMedian(x=10.0, y=10.0)
    assert result.dm == 0.0
    assert result.r == 0.0
    np.testing.assert_array_equal(result.decomposition.total, np.zeros(4))
    np.testing.assert_array_equal(result.decomposition.random, np.zeros(4))
    np.testing.assert_array_equal(result.decomposition.systematic, np.zeros(4))
    assert result.classification.inside_circle.all()


def test_points_on_diagonal_land_between_tangents() -> None:
    """With r = k = 0 the tangent bounds must admit equality."""

    result = youden_plot([[1, 1], [2, 2], [3, 3], [100, 100]], verbose=0)

    np.testing.assert_array_equal(result.decomposition.random, np.zeros(4))
    assert result.r == 0.0
    assert result.k == 0.0
    assert not result.classification.inside_circle.any()
    assert result.classification.between_tangents.all()
    assert not result.classification.outside_tangents.any()


def test_single_row_raises_insufficient_data() -> None:
    """One laboratory cannot produce a finite radius."""

    with pytest.raises(InsufficientDataError):
        youden_plot([[1.0, 2.0]], verbose=0)


@pytest.mark.parametrize(
    "data",
    [
        [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]],
        [[1.0, float("nan")], [2.0, 3.0]],
        [[1.0, float("inf")], [2.0, 3.0]],
        [],
        [["a", "b"], ["c", "d"]],
        [1.0, 2.0],
    ],
)
def test_malformed_matrix_raises_invalid_input(data: object) -> None:
    """Shape, finiteness and type problems are rejected at entry."""

    with pytest.raises(InvalidInputError):
        youden_plot(data, verbose=0)


def test_label_length_mismatch_raises() -> None:
    """Five rows with four labels should be rejected."""

    with pytest.raises(InvalidInputError):
        youden_plot(LAB_DATA[:5], labels=["a", "b", "c", "d"], verbose=0)


@pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1, 1.5, float("nan"), "0.05", True])
def test_bad_alpha_raises(alpha: object) -> None:
    """Alpha must be a real number strictly between 0 and 1."""

    with pytest.raises(InvalidInputError):
        youden_plot(LAB_DATA, alpha=alpha, verbose=0)


@pytest.mark.parametrize("verbose", [2, -1, "yes", None, 0.5])
def test_bad_verbose_raises(verbose: object) -> None:
    """Only 0/1 style verbosity flags are accepted."""

    with pytest.raises(InvalidInputError):
        youden_plot(LAB_DATA, verbose=verbose)


def test_reporter_called_only_when_verbose() -> None:
    """The report collaborator runs once when verbose and never otherwise."""

    calls = []
    quiet = youden_plot(LAB_DATA, verbose=0, reporter=calls.append)
    assert calls == []

    loud = youden_plot(LAB_DATA, verbose=1, reporter=calls.append)
    assert len(calls) == 1
    assert calls[0] is loud
    np.testing.assert_array_equal(quiet.stats, loud.stats)


def test_default_reporter_logs_table(caplog: pytest.LogCaptureFixture) -> None:
    """Without a reporter the table is written to the module logger."""

    with caplog.at_level("INFO", logger="youden.core"):
        youden_plot(LAB_DATA, labels=[f"lab{i}" for i in range(10)])

    assert "Manhattan median" in caplog.text
    assert "lab9" in caplog.text


def test_run_youden_defaults_labels() -> None:
    """Labels default to the 1-based row index."""

    result = run_youden(LAB_DATA[:3], YoudenConfig(verbose=False))

    assert result.labels == (1, 2, 3)


def test_run_youden_accepts_dataframe() -> None:
    """A two-column pandas DataFrame is a valid data matrix."""

    pd = pytest.importorskip("pandas")
    frame = pd.DataFrame(LAB_DATA, columns=["first", "second"])

    result = run_youden(frame, YoudenConfig(verbose=False))

    np.testing.assert_array_equal(result.data, LAB_DATA)
