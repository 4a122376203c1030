"""Column names for the tabular view of a Youden result.

Import these constants instead of repeating string literals so that the
core table, the report printer and the CSV export stay consistent.
"""

from __future__ import annotations

COLUMN_GROUP = "group"
COLUMN_X = "x"
COLUMN_Y = "y"
COLUMN_TOTAL = "total"
COLUMN_RANDOM = "random"
COLUMN_SYSTEMATIC = "systematic"
COLUMN_INSIDE_CIRCLE = "inside_circle"
COLUMN_BETWEEN_TANGENTS = "between_tangents"
COLUMN_OUTSIDE_TANGENTS = "outside_tangents"

RESULT_COLUMNS = [
    COLUMN_GROUP,
    COLUMN_X,
    COLUMN_Y,
    COLUMN_TOTAL,
    COLUMN_RANDOM,
    COLUMN_SYSTEMATIC,
    COLUMN_INSIDE_CIRCLE,
    COLUMN_BETWEEN_TANGENTS,
    COLUMN_OUTSIDE_TANGENTS,
]

FLAG_COLUMNS = [
    COLUMN_INSIDE_CIRCLE,
    COLUMN_BETWEEN_TANGENTS,
    COLUMN_OUTSIDE_TANGENTS,
]

# Display names used by the printed report table.
DISPLAY_NAMES = {
    COLUMN_GROUP: "Group",
    COLUMN_X: "First",
    COLUMN_Y: "Second",
    COLUMN_TOTAL: "Total error",
    COLUMN_RANDOM: "Random error",
    COLUMN_SYSTEMATIC: "Systematic error",
    COLUMN_INSIDE_CIRCLE: "Within circle",
    COLUMN_BETWEEN_TANGENTS: "Inside tangents",
    COLUMN_OUTSIDE_TANGENTS: "Outside tangents",
}

DEFAULT_ALPHA = 0.05
