"""Build rows from a hand-typed block against user-declared columns.

Unlike the CSV path, column names and types come from the caller and values
are converted by their declared type rather than an inferred one.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Sequence

from .exceptions import DuplicateColumnError
from .models import Column, ColumnType, IngestionReport, IngestionResult, Row
from .type_inference import is_date, make_label, to_number

logger = logging.getLogger(__name__)


def ensure_unique_column_names(names: Iterable[str]) -> None:
    """Raise ``DuplicateColumnError`` when a non-empty name is declared twice."""
    seen = set()
    for name in names:
        key = (name or "").strip()
        if not key:
            continue
        if key in seen:
            raise DuplicateColumnError("Column names must be unique", field="column_names", value=key)
        seen.add(key)


def convert_value(token: str, column_type: ColumnType) -> Any:
    if column_type == ColumnType.NUMBER:
        number = to_number(token)
        return token if number is None else number
    if column_type == ColumnType.BOOLEAN:
        return token.lower() == "true"
    if column_type == ColumnType.DATE:
        # Dates stay as typed; parsing only tells us whether they look right
        if not is_date(token):
            logger.debug(f"Value {token!r} does not parse as a date, keeping it as text")
        return token
    return token


def build_manual_rows(raw: str, column_names: Sequence[str],
                      column_types: Sequence[Any]) -> IngestionResult:
    """Parse ``raw`` (one comma-separated row per line) into rows and columns.

    Lines whose value count differs from ``len(column_names)`` are dropped and
    reported. Columns declared with a blank name are left out of both the
    column list and the rows. An empty block, or no declared columns, gives an
    empty result rather than an error. Name uniqueness is not checked here;
    see ``ensure_unique_column_names``.
    """
    names = [(name or "").strip() for name in column_names]
    types = [ColumnType.parse(column_types[i]) if i < len(column_types) else ColumnType.STRING
             for i in range(len(names))]
    kept = [i for i, name in enumerate(names) if name]

    block = (raw or "").strip()
    if not block or not kept:
        return IngestionResult()

    rows: List[Row] = []
    report = IngestionReport()

    for index, line in enumerate(block.split("\n")):
        values = [token.strip() for token in line.split(",")]
        if len(values) != len(names):
            logger.warning(f"Row {index + 1} has incorrect number of values. "
                           f"Expected {len(names)}, got {len(values)}")
            report.rejected.append(index)
            continue

        row: Row = {"id": f"row-{index}"}
        for i in kept:
            row[names[i]] = convert_value(values[i], types[i])
        rows.append(row)

    report.accepted = len(rows)
    if not rows:
        return IngestionResult(report=report)

    columns = [Column(name=names[i], label=make_label(names[i]), type=types[i]) for i in kept]
    return IngestionResult(rows=rows, columns=columns, report=report)


def parse_manual(raw: str, column_names: Sequence[str], column_types: Sequence[Any]) -> IngestionResult:
    """Check declared names are unique, then build the rows."""
    ensure_unique_column_names(column_names)
    return build_manual_rows(raw, column_names, column_types)
