"""Error taxonomy for dataset ingestion and storage."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional


class DatasetToolError(Exception):
    """Base exception carrying the offending field/value for callers."""

    error_code = "DATASET_TOOL_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None,
                 error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value
        if error_code is not None:
            self.error_code = error_code
        self.timestamp = datetime.now(timezone.utc)


class FormatError(DatasetToolError):
    """Raw input is structurally unusable (no header/data section, not a CSV file)."""

    error_code = "FORMAT_ERROR"


class ValidationError(DatasetToolError):
    """A caller-supplied value failed validation."""

    error_code = "VALIDATION_ERROR"


class DuplicateColumnError(ValidationError):
    """Two declared columns share the same name."""

    error_code = "DUPLICATE_COLUMN"


class EmptyDatasetError(DatasetToolError):
    """Ingestion produced no rows, so there is nothing to save."""

    error_code = "EMPTY_DATASET"


class DatasetNotFoundError(DatasetToolError):
    error_code = "DATASET_NOT_FOUND"


class StoreError(DatasetToolError):
    """The dataset store failed to persist or retrieve data."""

    error_code = "STORE_ERROR"
