import pytest

from src.crud.filters import DEFAULT_LIMIT, parse_positive_int, resolve_page


def test_page_offset_and_range():
    page = resolve_page("2", "10")
    assert page.offset == 10
    assert page.range == (10, 19)


@pytest.mark.parametrize("raw", [None, "abc", "0", "-3", "", True])
def test_malformed_page_falls_back_to_default(raw):
    assert parse_positive_int(raw, 1) == 1


def test_default_limit_applies():
    page = resolve_page()
    assert page.page == 1
    assert page.limit == DEFAULT_LIMIT
    assert resolve_page(limit="nope", default_limit=20).limit == 20
