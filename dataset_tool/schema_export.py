"""Column schema export utilities."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Union

import yaml

from .models import Dataset


def columns_schema(dataset: Dataset) -> List[Dict]:
    """Column metadata as plain dicts (``type`` as its string value)."""
    return [column.model_dump(mode="json") for column in dataset.columns]


def export_columns_yaml(dataset: Dataset, output_dir: Union[str, Path]) -> Path:
    """Write the dataset's column schema to ``<name>_columns.yaml``."""
    slug = re.sub(r"[^a-z0-9]+", "_", dataset.name.lower()).strip("_") or dataset.id
    path = Path(output_dir) / f"{slug}_columns.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        yaml.safe_dump(columns_schema(dataset), f, sort_keys=False)
    return path
