"""Shared visual styling constants and helpers for Youden plots."""

from __future__ import annotations

from typing import Hashable, List, Sequence, Tuple

import numpy as np
import pandas as pd
from matplotlib import colormaps

# Reference geometry colors.
COLOR_CIRCLE = "#00b000"
COLOR_PRECISION_LINE = "#ff9900"
COLOR_TANGENT = "#ff0000"
COLOR_MEDIAN_AXES = "#000000"

LINE_WIDTH = 2.0

RGBA = Tuple[float, float, float, float]


def group_codes(labels: Sequence[Hashable]) -> Tuple[np.ndarray, List[Hashable]]:
    """Return an integer group code per laboratory and the distinct groups.

    Groups are numbered in order of first appearance. Missing labels
    (``None`` or NaN) form one group of their own instead of being dropped.

    Parameters
    ----------
    labels:
        Group label of each laboratory, repeats allowed.

    Returns
    -------
    Tuple[np.ndarray, List[Hashable]]
        Codes aligned with ``labels`` and the distinct labels indexed by
        code.
    """

    codes, uniques = pd.factorize(
        pd.Series(list(labels), dtype=object),
        use_na_sentinel=False,
    )
    return np.asarray(codes), list(uniques)


def palette_colors(count: int) -> List[RGBA]:
    """Return ``count`` distinct RGBA colors.

    Up to 20 colors come from the qualitative ``tab20`` colormap; larger
    counts are sampled evenly from ``turbo``.
    """

    palette = colormaps["tab20"].colors
    if count <= len(palette):
        return [(*palette[index], 1.0) for index in range(count)]

    cmap = colormaps["turbo"]
    step = 1.0 / max(count - 1, 1)
    return [tuple(cmap(index * step)) for index in range(count)]


__all__ = [
    "COLOR_CIRCLE",
    "COLOR_MEDIAN_AXES",
    "COLOR_PRECISION_LINE",
    "COLOR_TANGENT",
    "LINE_WIDTH",
    "group_codes",
    "palette_colors",
]
