"""Command-line entry point for Youden plots.

Typical usage:

    youdenplot measurements.csv \\
        --group-column lab \\
        --alpha 0.05 \\
        --figure figures/youden.png \\
        --table-csv tables/youden.csv

The input CSV holds one row per laboratory. Unless ``--x-column`` and
``--y-column`` are given, the first two numeric columns are used as the
first and second measurement.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from youden.config import YoudenConfig
from youden.core import run_youden
from youden.errors import YoudenError
from youden.schema import DEFAULT_ALPHA
from youden_report.io import load_measurements
from youden_report.plots import write_youden_figure
from youden_report.tables import print_report, write_report_csv

LOGGER = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2


def _build_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser for the Youden plot tool.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser instance.
    """

    parser = argparse.ArgumentParser(
        description=(
            "Compute a Youden plot for paired inter-laboratory measurements "
            "and classify each laboratory by its error type."
        )
    )
    parser.add_argument(
        "input_csv",
        type=Path,
        help="CSV file with one row per laboratory.",
    )
    parser.add_argument(
        "--x-column",
        "-x",
        default=None,
        help="Column holding the first measurement (default: first numeric).",
    )
    parser.add_argument(
        "--y-column",
        "-y",
        default=None,
        help="Column holding the second measurement (default: second numeric).",
    )
    parser.add_argument(
        "--group-column",
        "-g",
        default=None,
        help=(
            "Column holding the laboratory/group label used for colors and "
            "the report table (default: row numbers 1..N)."
        ),
    )
    parser.add_argument(
        "--alpha",
        "-a",
        type=float,
        default=DEFAULT_ALPHA,
        help=(
            "Significance level of the confidence circle; the circle covers "
            f"(1 - alpha) * 100%% of laboratories (default: {DEFAULT_ALPHA})."
        ),
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Do not print the classification table.",
    )
    parser.add_argument(
        "--figure",
        "-f",
        type=Path,
        default=None,
        help="Write the Youden plot to this image path (PNG, PDF, SVG).",
    )
    parser.add_argument(
        "--table-csv",
        type=Path,
        default=None,
        help="Write the per-laboratory classification table to this CSV path.",
    )
    parser.add_argument(
        "--summary-json",
        type=Path,
        default=None,
        help="Write the median, circle and category counts to this JSON path.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging verbosity (default: INFO).",
    )
    return parser


def configure_logging(level: str) -> None:
    """Attach a plain stream handler to the package loggers."""

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    for name in ("youden", "youden_report"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.setLevel(getattr(logging, level))
        logger.addHandler(handler)


def write_summary_json(summary: dict, output_path: Path) -> Path:
    """Write ``summary`` as indented JSON to ``output_path``."""

    resolved = output_path.expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    resolved.write_text(json.dumps(summary, indent=2) + "\n", encoding="utf-8")
    print(f"Wrote summary to {resolved}")
    return resolved


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the ``youdenplot`` command.

    Parameters
    ----------
    argv:
        Optional sequence of command-line arguments. When omitted,
        :data:`sys.argv` semantics are used.

    Returns
    -------
    int
        Zero on success; ``2`` when the input cannot be analysed.
    """

    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        measurements = load_measurements(
            args.input_csv,
            x_column=args.x_column,
            y_column=args.y_column,
            group_column=args.group_column,
        )
        config = YoudenConfig.build(
            alpha=args.alpha,
            labels=measurements.labels,
            verbose=not args.quiet,
        )
        result = run_youden(measurements.data, config, reporter=print_report)
    except FileNotFoundError as err:
        LOGGER.error("%s", err)
        return EXIT_INVALID_INPUT
    except YoudenError as err:
        LOGGER.error("Cannot compute Youden plot for %s: %s", args.input_csv, err)
        return EXIT_INVALID_INPUT

    LOGGER.debug(
        "Used columns %s and %s", measurements.columns[0], measurements.columns[1]
    )

    if args.figure is not None:
        write_youden_figure(result, args.figure)
    if args.table_csv is not None:
        write_report_csv(result, args.table_csv)
    if args.summary_json is not None:
        write_summary_json(result.summary(), args.summary_json)

    return 0


if __name__ == "__main__":  # pragma: no cover - script entry point
    raise SystemExit(main())
