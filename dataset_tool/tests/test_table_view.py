import pytest

from dataset_tool.table_view import paginate, search_rows

ROWS = [
    {'id': f'row-{i}', 'city': city, 'visits': i}
    for i, city in enumerate(['Lima', 'Quito', 'Bogota', 'Santiago', 'La Paz'] * 5)
]


def test_search_is_case_insensitive_across_values():
    matches = search_rows(ROWS, 'LIMA')
    assert len(matches) == 5
    assert all(row['city'] == 'Lima' for row in matches)


def test_search_matches_numbers_and_ids():
    assert [row['id'] for row in search_rows(ROWS, 'row-24')] == ['row-24']
    assert {row['visits'] for row in search_rows(ROWS, '13')} == {13}


def test_blank_search_returns_everything():
    assert search_rows(ROWS, '  ') == ROWS


def test_paginate():
    page = paginate(ROWS, page=3, page_size=10)
    assert page.total == 25
    assert page.total_pages == 3
    assert [row['id'] for row in page.items] == [f'row-{i}' for i in range(20, 25)]
    assert page.has_previous and not page.has_next


def test_paginate_clamps_pages():
    assert paginate(ROWS, page=0).page == 1
    assert paginate(ROWS, page=99).page == 3
    empty = paginate([], page=4)
    assert empty.items == [] and empty.page == 1 and empty.total_pages == 0


def test_paginate_rejects_bad_page_size():
    with pytest.raises(ValueError):
        paginate(ROWS, page_size=0)
