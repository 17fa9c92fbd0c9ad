"""Command line entry point for ingesting, browsing and projecting datasets."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from shared.config import Settings, get_settings, setup_logging

from .exceptions import DatasetToolError, ValidationError
from .projector import PIE_SLICE_LIMIT, default_axes, pie_window
from .schema_export import export_columns_yaml
from .service import DatasetService
from .table_view import DEFAULT_PAGE_SIZE, paginate, search_rows


def parse_column_list(text: str) -> Tuple[List[str], List[str]]:
    """``"city:string,visits:number"`` -> (names, types); a missing type means string."""
    names: List[str] = []
    types: List[str] = []
    for item in text.split(","):
        name, _, col_type = item.partition(":")
        names.append(name.strip())
        types.append(col_type.strip() or "string")
    if not any(names):
        raise ValidationError("At least one column must be declared", field="columns", value=text)
    return names, types


def build_parser(settings: Optional[Settings] = None) -> argparse.ArgumentParser:
    page_size = settings.page_size if settings else DEFAULT_PAGE_SIZE
    pie_limit = settings.pie_slice_limit if settings else PIE_SLICE_LIMIT
    export_dir = str(settings.schema_export_dir) if settings else "schemas"

    parser = argparse.ArgumentParser(prog="dataset-tool", description="Ingest tabular data and project it for charts")
    parser.add_argument("--owner", default=None, help="Owner id used to scope datasets")
    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Upload a CSV file")
    ingest.add_argument("path")
    ingest.add_argument("--name", default=None, help="Dataset name (defaults to the file name)")

    manual = sub.add_parser("manual", help="Create a dataset from typed rows")
    manual.add_argument("--name", required=True)
    manual.add_argument("--columns", required=True, help='e.g. "city:string,visits:number"')
    source = manual.add_mutually_exclusive_group(required=True)
    source.add_argument("--data", help="Rows separated by newlines")
    source.add_argument("--data-file", help="File holding the rows")

    sub.add_parser("list", help="List datasets, newest first")

    show = sub.add_parser("show", help="Show a page of a dataset")
    show.add_argument("dataset_id")
    show.add_argument("--search", default="")
    show.add_argument("--page", type=int, default=1)
    show.add_argument("--page-size", type=int, default=page_size)

    plot = sub.add_parser("plot", help="Print chart points for two columns as JSON")
    plot.add_argument("dataset_id")
    plot.add_argument("x_column", nargs="?", help="Defaults to the first numeric column")
    plot.add_argument("y_column", nargs="?", help="Defaults to the second numeric column")
    plot.add_argument("--pie", action="store_true", help=f"Keep only the first {pie_limit} points")
    plot.set_defaults(pie_limit=pie_limit)

    delete = sub.add_parser("delete", help="Delete a dataset")
    delete.add_argument("dataset_id")

    export = sub.add_parser("export-schema", help="Write a dataset's columns to YAML")
    export.add_argument("dataset_id")
    export.add_argument("--output-dir", default=export_dir)

    return parser


def _resolve_axes(dataset, x_column: Optional[str], y_column: Optional[str]) -> Tuple[str, str]:
    if x_column is None or y_column is None:
        axes = default_axes(dataset.columns)
        if axes is None:
            raise ValidationError(f"Dataset {dataset.id} needs two numeric columns to pick axes",
                                  field="columns")
        x_column = x_column or axes[0]
        y_column = y_column or axes[1]
    for name in (x_column, y_column):
        if dataset.get_column(name) is None:
            raise ValidationError(f"Unknown column: {name}", field="column", value=name)
    return x_column, y_column


def _run(args: argparse.Namespace, service: DatasetService) -> int:
    if args.command == "ingest":
        dataset, report = service.ingest_csv_file(args.path, args.name, args.owner)
        print(f"Loaded {report.accepted} records with {len(dataset.columns)} columns as {dataset.id}")
        if report.rejected:
            print(f"Skipped lines: {', '.join(str(i) for i in report.rejected)}")

    elif args.command == "manual":
        names, types = parse_column_list(args.columns)
        raw = args.data if args.data is not None else Path(args.data_file).read_text(encoding="utf-8")
        dataset, report = service.ingest_manual(raw, names, types, args.name, args.owner)
        print(f"Dataset created successfully: {dataset.id} ({report.accepted} rows)")

    elif args.command == "list":
        datasets = service.list_datasets(args.owner)
        if not datasets:
            print("No datasets available")
        for dataset in datasets:
            print(f"{dataset.id}\t{dataset.name}\t{len(dataset.data)} rows\t{dataset.created_at.isoformat()}")

    elif args.command == "show":
        dataset = service.get_dataset(args.dataset_id)
        page = paginate(search_rows(dataset.data, args.search), args.page, args.page_size)
        print("\t".join(column.label for column in dataset.columns))
        for row in page.items:
            print("\t".join(str(row.get(column.name, "")) for column in dataset.columns))
        print(f"Page {page.page} of {page.total_pages} ({page.total} rows)")

    elif args.command == "plot":
        x_column, y_column = _resolve_axes(service.get_dataset(args.dataset_id), args.x_column, args.y_column)
        points = service.chart_points(args.dataset_id, x_column, y_column)
        if args.pie:
            points = pie_window(points, args.pie_limit)
        print(json.dumps([point.model_dump() for point in points], default=str))

    elif args.command == "delete":
        if not service.delete_dataset(args.dataset_id):
            print(f"Dataset {args.dataset_id} not found", file=sys.stderr)
            return 1
        print(f"Deleted {args.dataset_id}")

    elif args.command == "export-schema":
        path = export_columns_yaml(service.get_dataset(args.dataset_id), args.output_dir)
        print(f"Wrote {path}")

    return 0


def main(argv: Optional[Sequence[str]] = None, service: Optional[DatasetService] = None) -> int:
    owns_store = service is None
    settings = get_settings() if owns_store else None
    args = build_parser(settings).parse_args(argv)

    try:
        if owns_store:
            from .sql_store import SqlDatasetStore

            setup_logging(settings.logging)
            service = DatasetService(SqlDatasetStore(settings.database_url))
        return _run(args, service)
    except DatasetToolError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if owns_store and service is not None:
            service.store.close()


if __name__ == "__main__":
    sys.exit(main())
