"""Report tables for Youden plot results.

These helpers turn a :class:`~youden.result.YoudenResult` into the
classification table printed after a verbose run and into CSV files for
downstream analysis.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List

import pandas as pd

from youden.result import YoudenResult
from youden.schema import (
    DISPLAY_NAMES,
    FLAG_COLUMNS,
    RESULT_COLUMNS,
)
from youden_report.formatting import format_error, format_flag, format_percent


def build_report_table(result: YoudenResult) -> pd.DataFrame:
    """Return the per-laboratory table with human-readable column names."""

    frame = result.to_frame()
    return frame.rename(columns=DISPLAY_NAMES)


def format_report_table(result: YoudenResult) -> str:
    """Return a printable report with a summary header and the table.

    The header lists the Manhattan median, the random error standard
    deviation, the circle radius with its confidence level, and the number of
    laboratories per category.
    """

    counts = result.classification.counts()
    header = [
        f"Manhattan median: {format_error(result.median.x)} "
        f"{format_error(result.median.y)}",
        f"Random error SD: {format_error(result.s)}",
        f"{format_percent(result.confidence)}% circle radius: "
        f"{format_error(result.r)}",
        (
            f"Within circle: {counts['inside_circle']}  "
            f"Inside tangents: {counts['between_tangents']}  "
            f"Outside tangents: {counts['outside_tangents']}"
        ),
        "",
    ]
    display = build_report_table(result)
    for name in FLAG_COLUMNS:
        column = DISPLAY_NAMES[name]
        display[column] = display[column].map(format_flag)
    table = display.to_string(index=False, float_format=format_error)
    return "\n".join(header + [table])


def print_report(result: YoudenResult) -> None:
    """Print the report for ``result``; usable as a core reporter."""

    print(format_report_table(result))


def report_rows(result: YoudenResult) -> List[Dict[str, object]]:
    """Return CSV-ready rows keyed by the result column names."""

    rows: List[Dict[str, object]] = []
    for record in result.to_frame().to_dict(orient="records"):
        row: Dict[str, object] = {}
        for name in RESULT_COLUMNS:
            value = record[name]
            if name in FLAG_COLUMNS:
                row[name] = int(bool(value))
            else:
                row[name] = value
        rows.append(row)
    return rows


def write_report_csv(result: YoudenResult, output_path: Path) -> Path:
    """Write the per-laboratory table of ``result`` to ``output_path``.

    Returns
    -------
    Path
        Resolved location of the written file.
    """

    resolved = Path(output_path).expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)

    with resolved.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=RESULT_COLUMNS)
        writer.writeheader()
        for row in report_rows(result):
            writer.writerow(row)

    print(f"Wrote Youden table to {resolved}")
    return resolved


__all__ = [
    "build_report_table",
    "format_report_table",
    "print_report",
    "report_rows",
    "write_report_csv",
]
