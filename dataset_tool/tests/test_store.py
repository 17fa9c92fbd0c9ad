import pytest

from dataset_tool.csv_parser import parse_csv
from dataset_tool.exceptions import StoreError
from dataset_tool.models import ColumnType
from dataset_tool.sql_store import Base


def sample():
    result = parse_csv("city,visits,active\nLima,12,yes\nQuito,7.5,no\n")
    rows = [dict(row, active=row['active'] == 'yes') for row in result.rows]
    return rows, result.columns


def test_create_and_get(store):
    rows, columns = sample()
    created = store.create('trips', rows, columns, owner_id='alice')

    assert created.id
    assert created.name == 'trips'
    assert created.owner_id == 'alice'

    fetched = store.get_by_id(created.id)
    assert fetched is not None
    assert fetched.data == rows
    assert fetched.columns == columns
    assert fetched.columns[1].type == ColumnType.NUMBER
    assert fetched.data[0]['active'] is True
    assert isinstance(fetched.data[0]['visits'], int)


def test_get_unknown_returns_none(store):
    assert store.get_by_id('nope') is None


def test_list_is_scoped_and_newest_first(store):
    rows, columns = sample()
    first = store.create('first', rows, columns, owner_id='alice')
    second = store.create('second', rows, columns, owner_id='alice')
    store.create('other', rows, columns, owner_id='bob')
    store.create('anonymous', rows, columns)

    assert [d.id for d in store.list_for_owner('alice')] == [second.id, first.id]
    assert [d.name for d in store.list_for_owner(None)] == ['anonymous']
    assert store.list_for_owner('carol') == []


def test_delete(store):
    rows, columns = sample()
    created = store.create('trips', rows, columns)

    assert store.delete_by_id(created.id) is True
    assert store.get_by_id(created.id) is None
    assert store.delete_by_id(created.id) is False


def test_memory_store_ids(memory_store):
    rows, columns = sample()
    assert memory_store.create('a', rows, columns).id == 'dataset-1'
    assert memory_store.create('b', rows, columns).id == 'dataset-2'


def test_stored_rows_are_copies(memory_store):
    rows, columns = sample()
    created = memory_store.create('a', rows, columns)
    rows[0]['city'] = 'changed'
    assert created.data[0]['city'] == 'Lima'


def test_read_datasets_are_copies(store):
    rows, columns = sample()
    created = store.create('a', rows, columns, owner_id='u1')
    created.data.append({'id': 'row-9', 'city': 'Quito'})

    fetched = store.get_by_id(created.id)
    fetched.data[0]['city'] = 'changed'
    fetched.data.append({'id': 'row-10', 'city': 'Cusco'})
    store.list_for_owner('u1')[0].data.clear()

    stored = store.get_by_id(created.id)
    assert len(stored.data) == len(rows)
    assert stored.data[0]['city'] == 'Lima'


def test_sql_errors_surface_as_store_error(sql_store):
    rows, columns = sample()
    Base.metadata.drop_all(sql_store.engine)
    with pytest.raises(StoreError):
        sql_store.create('trips', rows, columns)
