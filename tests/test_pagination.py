from __future__ import annotations

import pytest

from core.services.pagination import Paginator


def _at_page(total_pages: int, page: int, per_page: int = 1) -> Paginator:
    paginator = Paginator(per_page)
    paginator.initialize(total_pages * per_page)
    assert paginator.set_page(page)
    return paginator


def test_total_pages_rounds_up() -> None:
    paginator = Paginator(21)
    paginator.initialize(1348)
    assert paginator.total_pages == 65
    assert paginator.current_page == 1


def test_empty_list_reports_page_one_of_zero() -> None:
    paginator = Paginator(21)
    paginator.initialize(0)
    state = paginator.state
    assert (state.current_page, state.total_pages, state.total_items) == (1, 0, 0)
    assert paginator.page_window() == []
    assert paginator.current_slice([]) == []


def test_initialize_resets_to_first_page_when_total_changes() -> None:
    paginator = Paginator(10)
    paginator.initialize(100)
    paginator.set_page(5)

    paginator.initialize(100)
    assert paginator.current_page == 5

    paginator.initialize(99)
    assert paginator.current_page == 1


def test_set_page_outside_range_is_rejected() -> None:
    paginator = Paginator(10)
    paginator.initialize(35)
    paginator.set_page(2)
    before = paginator.state

    assert paginator.set_page(0) is False
    assert paginator.set_page(5) is False
    assert paginator.set_page(-1) is False
    assert paginator.state == before

    assert paginator.set_page(4) is True
    assert paginator.current_page == 4


def test_next_and_previous_stop_at_the_edges() -> None:
    paginator = Paginator(10)
    paginator.initialize(25)

    assert paginator.previous_page() is False
    assert paginator.has_previous_page() is False
    assert paginator.next_page() is True
    assert paginator.next_page() is True
    assert paginator.next_page() is False
    assert paginator.has_next_page() is False
    assert paginator.current_page == 3
    assert paginator.previous_page() is True
    assert paginator.current_page == 2


def test_first_and_last_page() -> None:
    paginator = Paginator(10)
    paginator.initialize(95)
    paginator.last_page()
    assert paginator.current_page == 10
    paginator.first_page()
    assert paginator.current_page == 1

    paginator.initialize(0)
    paginator.last_page()
    assert paginator.current_page == 1


def test_current_slice_is_short_on_last_page() -> None:
    items = list(range(1, 48))
    paginator = Paginator(21)
    paginator.initialize(len(items))

    assert paginator.current_slice(items) == items[:21]
    paginator.last_page()
    assert paginator.current_slice(items) == items[42:]
    assert len(paginator.current_slice(items)) == 5


@pytest.mark.parametrize(
    "page, expected",
    [
        (1, list(range(1, 8))),
        (2, list(range(1, 8))),
        (4, list(range(1, 8))),
        (12, list(range(9, 16))),
        (22, list(range(18, 25))),
        (24, list(range(18, 25))),
    ],
)
def test_page_window_slides_and_respects_edges(page: int, expected: list[int]) -> None:
    assert _at_page(24, page).page_window(7) == expected


def test_page_window_shows_all_pages_when_few() -> None:
    assert _at_page(5, 3).page_window(7) == [1, 2, 3, 4, 5]
    assert _at_page(7, 7).page_window(7) == list(range(1, 8))


def test_page_window_even_size() -> None:
    assert _at_page(20, 10).page_window(4) == [8, 9, 10, 11]
    assert _at_page(20, 20).page_window(4) == [17, 18, 19, 20]


def test_page_window_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        _at_page(3, 1).page_window(0)


def test_reset_keeps_items_per_page() -> None:
    paginator = Paginator(21)
    paginator.initialize(100)
    paginator.set_page(3)

    paginator.reset()

    assert paginator.state.model_dump() == {
        "current_page": 1,
        "items_per_page": 21,
        "total_items": 0,
        "total_pages": 0,
    }


def test_paginators_are_independent() -> None:
    full, filtered = Paginator(10), Paginator(10)
    full.initialize(100)
    filtered.initialize(30)
    full.set_page(7)
    assert filtered.current_page == 1
    assert filtered.set_page(7) is False


def test_items_per_page_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Paginator(0)
