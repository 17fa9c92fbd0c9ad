"""Project dataset rows into chart points."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .models import ChartPoint, Column, ColumnType, Dataset, Row

PIE_SLICE_LIMIT = 10


def project_columns(dataset: Union[Dataset, Sequence[Row]], x_column: str,
                    y_column: str) -> List[ChartPoint]:
    """One ``ChartPoint`` per row, in row order.

    Rows without one of the columns give ``None`` for that axis; nothing is
    filtered, deduplicated or aggregated.
    """
    rows = dataset.data if isinstance(dataset, Dataset) else dataset
    return [ChartPoint(x=row.get(x_column), y=row.get(y_column)) for row in rows]


def pie_window(points: Iterable[ChartPoint], limit: int = PIE_SLICE_LIMIT) -> List[ChartPoint]:
    """Leading points a pie chart has room for."""
    return list(points)[:max(limit, 0)]


def numeric_columns(columns: Iterable[Column]) -> List[Column]:
    return [column for column in columns if column.type == ColumnType.NUMBER]


def default_axes(columns: Iterable[Column]) -> Optional[Tuple[str, str]]:
    """First two numeric columns as ``(x, y)``, or ``None`` if there are fewer."""
    numeric = numeric_columns(columns)
    if len(numeric) < 2:
        return None
    return numeric[0].name, numeric[1].name
