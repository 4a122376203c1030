"""Load paired laboratory measurements from CSV files.

Each row of the input table is one laboratory. Two numeric columns hold the
first and second measurement; an optional column holds the group label.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Hashable, List, Optional, Tuple

import numpy as np
import pandas as pd

from youden.errors import InvalidInputError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Measurements:
    """Measurements loaded from a table.

    Parameters
    ----------
    data:
        ``(N, 2)`` float array with the first and second measurement.
    labels:
        Group labels, or ``None`` when no group column was requested.
    columns:
        Names of the two measurement columns that were used.
    """

    data: np.ndarray
    labels: Optional[List[Hashable]]
    columns: Tuple[str, str]


def load_measurements(
    csv_path: Path,
    *,
    x_column: Optional[str] = None,
    y_column: Optional[str] = None,
    group_column: Optional[str] = None,
) -> Measurements:
    """Return measurements read from ``csv_path``.

    When ``x_column`` or ``y_column`` is omitted, the first numeric columns
    not otherwise claimed are used in table order.

    Raises
    ------
    FileNotFoundError
        If ``csv_path`` does not exist.
    InvalidInputError
        If a requested column is missing or fewer than two numeric columns
        are available, or the file is empty or not valid CSV.
    """

    resolved = Path(csv_path).expanduser().resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"Measurements CSV not found at {resolved}")

    try:
        frame = pd.read_csv(resolved)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as err:
        raise InvalidInputError(
            f"Cannot read measurements from {resolved}: {err}"
        ) from err
    return measurements_from_frame(
        frame,
        x_column=x_column,
        y_column=y_column,
        group_column=group_column,
    )


def measurements_from_frame(
    frame: pd.DataFrame,
    *,
    x_column: Optional[str] = None,
    y_column: Optional[str] = None,
    group_column: Optional[str] = None,
) -> Measurements:
    """Return measurements selected from an in-memory table."""

    for column in (x_column, y_column, group_column):
        if column is not None and column not in frame.columns:
            raise InvalidInputError(
                f"Column {column!r} not found; available columns: "
                f"{', '.join(map(str, frame.columns))}"
            )

    claimed = {x_column, y_column, group_column}
    candidates = [
        column
        for column in frame.select_dtypes(include="number").columns
        if column not in claimed
    ]
    if x_column is None:
        if not candidates:
            raise InvalidInputError(
                "No numeric column available for the first measure."
            )
        x_column = candidates.pop(0)
    if y_column is None:
        if not candidates:
            raise InvalidInputError(
                "No numeric column available for the second measure."
            )
        y_column = candidates.pop(0)

    values = frame[[x_column, y_column]].apply(pd.to_numeric, errors="coerce")
    dropped = int(values.isna().any(axis=1).sum())
    if dropped:
        LOGGER.warning(
            "%d row(s) with missing or non-numeric measurements in columns "
            "%s/%s; the data matrix will be rejected.",
            dropped,
            x_column,
            y_column,
        )

    labels = None
    if group_column is not None:
        groups = frame[group_column]
        missing = int(groups.isna().sum())
        if missing:
            LOGGER.warning(
                "%d row(s) have no label in group column %s; they are plotted "
                "as one unlabelled group.",
                missing,
                group_column,
            )
        labels = groups.tolist()

    return Measurements(
        data=values.to_numpy(dtype=float),
        labels=labels,
        columns=(str(x_column), str(y_column)),
    )


__all__ = ["Measurements", "load_measurements", "measurements_from_frame"]
