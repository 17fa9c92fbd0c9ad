"""
Dataset store interface.

The ingestion core never owns persistence; it is handed a ``DatasetStore``
implementation. ``InMemoryDatasetStore`` keeps everything on the instance and
is what the tests use; ``dataset_tool.sql_store`` persists through SQLAlchemy.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .models import Column, Dataset, Row

logger = logging.getLogger(__name__)


class DatasetStore(ABC):
    """Create/list/get/delete access to persisted datasets."""

    @abstractmethod
    def create(self, name: str, rows: Sequence[Row], columns: Sequence[Column],
               owner_id: Optional[str] = None) -> Dataset:
        """Persist a new dataset and return it with its store-assigned id.

        Raises:
            StoreError: if the dataset could not be saved.
        """

    @abstractmethod
    def list_for_owner(self, owner_id: Optional[str]) -> List[Dataset]:
        """Datasets of ``owner_id``, newest first."""

    @abstractmethod
    def get_by_id(self, dataset_id: str) -> Optional[Dataset]:
        pass

    @abstractmethod
    def delete_by_id(self, dataset_id: str) -> bool:
        """Delete a dataset; ``False`` when there was nothing to delete."""

    def close(self) -> None:
        pass


class InMemoryDatasetStore(DatasetStore):
    """Process-local store; ids look like ``dataset-<n>``."""

    def __init__(self):
        self._datasets: Dict[str, Dataset] = {}
        self._counter = 0

    def create(self, name: str, rows: Sequence[Row], columns: Sequence[Column],
               owner_id: Optional[str] = None) -> Dataset:
        self._counter += 1
        dataset = Dataset(
            id=f"dataset-{self._counter}",
            name=name,
            columns=list(columns),
            data=[dict(row) for row in rows],
            created_at=datetime.now(timezone.utc),
            owner_id=owner_id,
        )
        self._datasets[dataset.id] = dataset
        logger.debug(f"Stored dataset {dataset.id} ({len(dataset.data)} rows)")
        return dataset.model_copy(deep=True)

    def list_for_owner(self, owner_id: Optional[str]) -> List[Dataset]:
        owned = [d for d in self._datasets.values() if d.owner_id == owner_id]
        # Insertion order breaks ties between identical timestamps
        ordered = sorted(enumerate(owned), key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [dataset.model_copy(deep=True) for _, dataset in ordered]

    def get_by_id(self, dataset_id: str) -> Optional[Dataset]:
        dataset = self._datasets.get(dataset_id)
        # Callers get copies; stored datasets only change by deletion
        return dataset.model_copy(deep=True) if dataset is not None else None

    def delete_by_id(self, dataset_id: str) -> bool:
        return self._datasets.pop(dataset_id, None) is not None
