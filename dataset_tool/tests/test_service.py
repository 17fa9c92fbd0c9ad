import pytest

from dataset_tool.exceptions import (
    DatasetNotFoundError,
    DuplicateColumnError,
    EmptyDatasetError,
    FormatError,
    ValidationError,
)
from dataset_tool.models import ChartPoint
from dataset_tool.service import DatasetService


def test_ingest_csv(service):
    dataset, report = service.ingest_csv("a,b\n1,2\n3\n5,6\n", '  numbers ', owner_id='alice')

    assert dataset.name == 'numbers'
    assert len(dataset.data) == 2
    assert report.accepted == 2
    assert report.rejected == [2]
    assert service.list_datasets('alice') == [dataset]


def test_ingest_requires_a_name(service):
    with pytest.raises(ValidationError):
        service.ingest_csv("a\n1\n", '   ')
    assert service.list_datasets() == []


def test_structural_failure_saves_nothing(service):
    with pytest.raises(FormatError):
        service.ingest_csv("onlyheader\n", 'broken')
    assert service.list_datasets() == []


def test_no_rows_saves_nothing(service):
    with pytest.raises(EmptyDatasetError) as exc:
        service.ingest_csv("a,b\n1\n", 'empty')
    assert exc.value.message == 'No data found in the CSV file'
    assert service.list_datasets() == []


def test_ingest_csv_file(service, data_dir):
    dataset, report = service.ingest_csv_file(data_dir / 'trips.csv')
    assert dataset.name == 'trips'
    assert report.rejected == [3]
    assert dataset.column_names == ['destination', 'trip_date', 'distance_km', 'nights', 'business_trip']


def test_ingest_csv_file_with_name(service, data_dir):
    dataset, _ = service.ingest_csv_file(data_dir / 'mixed_types.csv', name='Visits')
    assert dataset.name == 'Visits'


def test_ingest_rejects_non_csv_files(service, tmp_path):
    path = tmp_path / 'trips.txt'
    path.write_text("a,b\n1,2\n")
    with pytest.raises(FormatError):
        service.ingest_csv_file(path)


def test_ingest_manual(service):
    dataset, report = service.ingest_manual(
        "Lima,12\nQuito,7", ['city', 'visits'], ['string', 'number'], 'Manual')
    assert dataset.data == [
        {'id': 'row-0', 'city': 'Lima', 'visits': 12},
        {'id': 'row-1', 'city': 'Quito', 'visits': 7},
    ]
    assert report.accepted == 2


def test_ingest_manual_duplicate_columns(service):
    with pytest.raises(DuplicateColumnError):
        service.ingest_manual("1,2", ['a', 'a'], ['number', 'number'], 'dupes')
    assert service.list_datasets() == []


def test_ingest_manual_without_valid_rows(service):
    with pytest.raises(EmptyDatasetError) as exc:
        service.ingest_manual("1,2,3", ['a', 'b'], ['number', 'number'], 'bad')
    assert exc.value.message == 'No valid data to save'


def test_get_and_delete(service):
    dataset, _ = service.ingest_csv("a\n1\n", 'one')
    assert service.get_dataset(dataset.id) == dataset

    assert service.delete_dataset(dataset.id) is True
    assert service.delete_dataset(dataset.id) is False
    with pytest.raises(DatasetNotFoundError):
        service.get_dataset(dataset.id)


def test_chart_points(service):
    dataset, _ = service.ingest_csv("x,y\n1,10\n2,20\n", 'points')
    assert service.chart_points(dataset.id, 'x', 'y') == [ChartPoint(x=1, y=10), ChartPoint(x=2, y=20)]
    assert service.chart_points('missing', 'x', 'y') == []
    assert [c.name for c in service.columns(dataset.id)] == ['x', 'y']
    assert service.columns('missing') == []


def test_service_on_sql_store(sql_store, data_dir):
    service = DatasetService(sql_store)
    dataset, _ = service.ingest_csv_file(data_dir / 'trips.csv', owner_id='alice')

    points = service.chart_points(dataset.id, 'destination', 'distance_km')
    assert points[0] == ChartPoint(x='Porto', y=1450)
    assert len(points) == 4
