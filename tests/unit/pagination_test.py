import pytest

from utils.errors import PageOutOfRange
from utils.pagination import check_page, get_page_choices, get_page_offset, get_total_pages


def test_pagination():
    choices = list(range(25))

    # First page
    result = get_page_choices(choices, 0, 10)
    assert result == list(range(10))

    # Middle page
    result = get_page_choices(choices, 1, 10)
    assert result == list(range(10, 20))

    # Last page partial
    result = get_page_choices(choices, 2, 10)
    assert result == list(range(20, 25))


def test_pagination_edge_cases():
    # Empty choices
    assert get_page_choices([], 0, 10) == []

    # Page beyond data
    assert get_page_choices(list(range(15)), 5, 10) == []

    # Negative pages are empty rather than slicing from the end
    assert get_page_choices(list(range(15)), -1, 10) == []


def test_total_pages():
    assert get_total_pages(20, 10) == 2
    assert get_total_pages(25, 10) == 3
    assert get_total_pages(0, 10) == 0
    assert get_total_pages(100, 12) == 9

    with pytest.raises(ValueError):
        get_total_pages(15, 0)


def test_page_offset():
    # offset = (current_page - 1) * limit
    assert get_page_offset(1, 12) == 0
    assert get_page_offset(2, 12) == 12
    assert get_page_offset(9, 12) == 96


def test_pagination_consistency():
    choices = list(range(23))
    per_page = 7

    all_items = []
    for page in range(get_total_pages(len(choices), per_page)):
        all_items.extend(get_page_choices(choices, page, per_page))

    assert all_items == choices


def test_check_page():
    assert check_page(1) == 1
    assert check_page(500) == 500  # no upper bound until the page count is known
    assert check_page(9, 9) == 9
    assert check_page(3, 0) == 3  # an empty collection has no upper bound either


@pytest.mark.parametrize("page, total_pages", [(0, None), (-3, None), (10, 9), ("2", None), (1.0, None), (True, 9)])
def test_check_page_rejects(page, total_pages):
    with pytest.raises(PageOutOfRange) as e:
        check_page(page, total_pages)
    assert e.value.page == page
