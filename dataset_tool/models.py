"""
Dataset models
==============

Pydantic models describing ingested datasets:

- ``Column``: metadata for one named field across all rows
- ``Dataset``: a named, persisted collection of rows plus column metadata
- ``ChartPoint``: one projected ``(x, y)`` pair, never persisted
- ``IngestionReport`` / ``IngestionResult``: output of the CSV and manual parsers

Rows are kept as plain ``dict`` objects keyed by column name with an extra
``id`` entry (``row-<index>``), which is also how they are stored.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

Row = Dict[str, Any]


class ColumnType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"

    @classmethod
    def parse(cls, value: Any) -> "ColumnType":
        """Return the matching type, falling back to ``STRING`` for unknown names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.STRING


class Column(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Raw identifier used as the row key")
    label: str = Field(..., description="Display label derived from the name")
    type: ColumnType = Field(default=ColumnType.STRING)


class Dataset(BaseModel):
    """A stored dataset; immutable once created apart from deletion."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    columns: List[Column] = Field(default_factory=list)
    data: List[Row] = Field(default_factory=list)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="createdAt"
    )
    owner_id: Optional[str] = Field(default=None, alias="ownerId")

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def get_column(self, name: str) -> Optional[Column]:
        return next((column for column in self.columns if column.name == name), None)


class ChartPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: Any = None
    y: Any = None


class IngestionReport(BaseModel):
    """Which lines made it into the dataset and which were dropped."""

    accepted: int = 0
    rejected: List[int] = Field(default_factory=list)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)


class IngestionResult(BaseModel):
    rows: List[Row] = Field(default_factory=list)
    columns: List[Column] = Field(default_factory=list)
    report: IngestionReport = Field(default_factory=IngestionReport)

    @property
    def is_empty(self) -> bool:
        return not self.rows
