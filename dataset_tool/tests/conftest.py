from pathlib import Path

import pytest
from sqlalchemy import create_engine

from dataset_tool.service import DatasetService
from dataset_tool.sql_store import SqlDatasetStore
from dataset_tool.store import InMemoryDatasetStore

DATA_DIR = Path(__file__).parent / 'data'


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def memory_store():
    return InMemoryDatasetStore()


@pytest.fixture
def sql_store():
    store = SqlDatasetStore(engine=create_engine('sqlite://'))
    yield store
    store.close()


@pytest.fixture(params=['memory', 'sql'])
def store(request):
    return request.getfixturevalue(f'{request.param}_store')


@pytest.fixture
def service(memory_store):
    return DatasetService(memory_store)
