"""
Tabular dataset ingestion and chart projection.

Public entry points:
- ``parse_csv``: CSV text -> rows + inferred columns
- ``parse_manual``: typed block + declared columns -> rows + columns
- ``project_columns``: dataset + two column names -> chart points
- ``DatasetService``: the same operations wired to a ``DatasetStore``
"""

from dataset_tool.csv_parser import parse_csv
from dataset_tool.manual_builder import build_manual_rows, parse_manual
from dataset_tool.models import ChartPoint, Column, ColumnType, Dataset, IngestionReport, IngestionResult
from dataset_tool.projector import default_axes, pie_window, project_columns
from dataset_tool.service import DatasetService
from dataset_tool.store import DatasetStore, InMemoryDatasetStore
from dataset_tool.type_inference import infer_column_type

__all__ = [
    "parse_csv",
    "parse_manual",
    "build_manual_rows",
    "project_columns",
    "pie_window",
    "default_axes",
    "infer_column_type",
    "ChartPoint",
    "Column",
    "ColumnType",
    "Dataset",
    "IngestionReport",
    "IngestionResult",
    "DatasetService",
    "DatasetStore",
    "InMemoryDatasetStore",
]
