"""Ingestion and query operations on top of an injected dataset store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

from .csv_parser import parse_csv
from .exceptions import DatasetNotFoundError, EmptyDatasetError, FormatError, ValidationError
from .manual_builder import parse_manual
from .models import ChartPoint, Column, Dataset, IngestionReport, IngestionResult
from .projector import project_columns
from .store import DatasetStore

logger = logging.getLogger(__name__)

CSV_SUFFIX = ".csv"


class DatasetService:
    """Turns raw text into stored datasets and stored datasets into chart points."""

    def __init__(self, store: DatasetStore):
        self.store = store

    def ingest_csv(self, text: str, name: str,
                   owner_id: Optional[str] = None) -> Tuple[Dataset, IngestionReport]:
        """Parse CSV text and save it under ``name``."""
        dataset_name = self._require_name(name)
        result = parse_csv(text)
        return self._save(dataset_name, result, owner_id, empty_message="No data found in the CSV file")

    def ingest_csv_file(self, path: Union[str, Path], name: Optional[str] = None,
                        owner_id: Optional[str] = None) -> Tuple[Dataset, IngestionReport]:
        """Read a ``.csv`` file and save it; the name defaults to the file stem."""
        path = Path(path)
        if path.suffix.lower() != CSV_SUFFIX:
            raise FormatError("Please upload a CSV file", field="path", value=str(path))
        text = path.read_text(encoding="utf-8-sig")
        return self.ingest_csv(text, name if name is not None else path.stem, owner_id)

    def ingest_manual(self, raw: str, column_names: Sequence[str], column_types: Sequence[Any],
                      name: str, owner_id: Optional[str] = None) -> Tuple[Dataset, IngestionReport]:
        """Build rows from a typed block against declared columns and save them."""
        dataset_name = self._require_name(name)
        result = parse_manual(raw, column_names, column_types)
        return self._save(dataset_name, result, owner_id, empty_message="No valid data to save")

    def list_datasets(self, owner_id: Optional[str] = None) -> List[Dataset]:
        return self.store.list_for_owner(owner_id)

    def get_dataset(self, dataset_id: str) -> Dataset:
        dataset = self.store.get_by_id(dataset_id)
        if dataset is None:
            raise DatasetNotFoundError(f"Dataset {dataset_id} not found", field="dataset_id", value=dataset_id)
        return dataset

    def delete_dataset(self, dataset_id: str) -> bool:
        deleted = self.store.delete_by_id(dataset_id)
        if not deleted:
            logger.warning(f"Dataset {dataset_id} was not deleted: not found")
        return deleted

    def columns(self, dataset_id: str) -> List[Column]:
        dataset = self.store.get_by_id(dataset_id)
        return list(dataset.columns) if dataset else []

    def chart_points(self, dataset_id: str, x_column: str, y_column: str) -> List[ChartPoint]:
        """Projected points of a stored dataset; an unknown id gives no points."""
        dataset = self.store.get_by_id(dataset_id)
        if dataset is None:
            return []
        return project_columns(dataset, x_column, y_column)

    @staticmethod
    def _require_name(name: Optional[str]) -> str:
        dataset_name = (name or "").strip()
        if not dataset_name:
            raise ValidationError("Dataset name is required", field="name", value=name)
        return dataset_name

    def _save(self, name: str, result: IngestionResult, owner_id: Optional[str],
              empty_message: str) -> Tuple[Dataset, IngestionReport]:
        if result.is_empty:
            raise EmptyDatasetError(empty_message, field="data")
        dataset = self.store.create(name, result.rows, result.columns, owner_id)
        logger.info(f"Loaded {len(result.rows)} records with {len(result.columns)} columns into '{name}'")
        return dataset, result.report
