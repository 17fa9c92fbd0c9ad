import pytest

from dataset_tool.models import ColumnType
from dataset_tool.type_inference import infer_column_type, is_date, make_label, to_number


@pytest.mark.parametrize('value', [None, ''])
def test_empty_values_are_strings(value):
    assert infer_column_type(value) == ColumnType.STRING


def test_native_values():
    assert infer_column_type(True) == ColumnType.BOOLEAN
    assert infer_column_type(False) == ColumnType.BOOLEAN
    assert infer_column_type(3) == ColumnType.NUMBER
    assert infer_column_type(2.5) == ColumnType.NUMBER


def test_date_strings():
    assert infer_column_type('2024-01-15') == ColumnType.DATE
    assert is_date('2024-01-15')
    assert not is_date('pineapple')
    assert not is_date('')


@pytest.mark.parametrize('value,expected', [
    ('January', ColumnType.STRING),
    ('August', ColumnType.STRING),
    ('Sunday', ColumnType.STRING),
    ('Porto 2024', ColumnType.STRING),
    ('Sept 5', ColumnType.DATE),
])
def test_month_names_need_a_day_or_year(value, expected):
    assert infer_column_type(value) == expected


def test_short_strings_are_never_dates():
    # "12/1" would parse as a date but is too short to count as one
    assert infer_column_type('12/1') == ColumnType.STRING


def test_numeric_and_plain_strings():
    assert infer_column_type('42') == ColumnType.NUMBER
    assert infer_column_type('Porto') == ColumnType.STRING
    assert infer_column_type('pineapple') == ColumnType.STRING


@pytest.mark.parametrize('token,expected', [
    ('42', 42),
    (' 7 ', 7),
    ('-3.5', -3.5),
    ('1e3', 1000.0),
    ('2.0', 2.0),
])
def test_to_number(token, expected):
    result = to_number(token)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize('token', ['', '   ', '1_000', 'nan', 'inf', '-Infinity', '12abc', 'x', '\u0661\u0662', '\uff13'])
def test_to_number_rejects(token):
    assert to_number(token) is None


def test_make_label():
    assert make_label('first_name') == 'First Name'
    assert make_label('distance_km') == 'Distance Km'
    assert make_label('a') == 'A'
    assert make_label('tripId') == 'TripId'
