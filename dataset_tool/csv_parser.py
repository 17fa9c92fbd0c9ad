"""Parse comma-separated text into typed rows plus column metadata.

Only the plain ``a,b,c`` convention is understood: there is no quoting or
escaping, so a comma inside a value always splits it.
"""

from __future__ import annotations

import logging
from typing import List

from .exceptions import FormatError
from .models import Column, IngestionReport, IngestionResult, Row
from .type_inference import infer_column_type, make_label, to_number

logger = logging.getLogger(__name__)

DELIMITER = ","


def split_line(line: str) -> List[str]:
    return [token.strip() for token in line.split(DELIMITER)]


def coerce_token(token: str):
    """Trimmed token as a number when it is one, otherwise as text."""
    number = to_number(token)
    return token if number is None else number


def parse_csv(text: str) -> IngestionResult:
    """Parse CSV text whose first line is the header.

    Rows whose value count differs from the header are skipped and reported,
    never raised. Column types come from the first accepted row only; later
    rows keep whatever value they parsed to, even when it disagrees.

    Raises:
        FormatError: when the text has no header plus at least one data line.
    """
    # Only "\n" ends a line; other Unicode line breaks stay inside values
    lines = [line[:-1] if line.endswith("\r") else line for line in (text or "").split("\n")]
    if sum(1 for line in lines if line.strip()) < 2:
        raise FormatError("CSV must have a header row and at least one row of data",
                          field="text")

    headers = split_line(lines[0])
    rows: List[Row] = []
    report = IngestionReport()

    for index in range(1, len(lines)):
        line = lines[index].strip()
        if not line:
            continue

        values = split_line(line)
        if len(values) != len(headers):
            logger.warning(f"Row {index} has {len(values)} values, expected {len(headers)}. Skipping.")
            report.rejected.append(index)
            continue

        row: Row = {"id": f"row-{index}"}
        for header, value in zip(headers, values):
            row[header] = coerce_token(value)
        rows.append(row)

    report.accepted = len(rows)
    first_row = rows[0] if rows else {}
    columns = [
        Column(name=header, label=make_label(header), type=infer_column_type(first_row.get(header)))
        for header in headers
    ]

    logger.debug(f"Parsed {report.accepted} rows with {len(columns)} columns "
                 f"({report.rejected_count} skipped)")
    return IngestionResult(rows=rows, columns=columns, report=report)
