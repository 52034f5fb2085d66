"""
Tests for the clients table sort state.
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from app.utils.table_sorting import (
    DEFAULT_SORT,
    SortState,
    first_direction_descending,
    sort_rows,
    toggle_sort,
)


def test_default_sort_is_newest_first():
    assert DEFAULT_SORT == SortState(column="created_at", descending=True)


@pytest.mark.parametrize("column", ["name", "email", "status"])
def test_text_columns_start_ascending(column):
    assert not first_direction_descending(column)


@pytest.mark.parametrize("column", ["project_count", "total_budget", "created_at"])
def test_numeric_and_date_columns_start_descending(column):
    assert first_direction_descending(column)


def test_toggle_cycles_through_both_directions_and_off():
    first = toggle_sort(None, "name")
    second = toggle_sort(first, "name")
    third = toggle_sort(second, "name")

    assert first == SortState(column="name", descending=False)
    assert second == SortState(column="name", descending=True)
    assert third is None


def test_toggle_from_default_sort():
    assert toggle_sort(DEFAULT_SORT, "created_at") == SortState(column="created_at", descending=False)
    assert toggle_sort(SortState(column="created_at", descending=False), "created_at") is None


def test_toggle_other_column_starts_fresh():
    assert toggle_sort(SortState(column="name", descending=True), "total_budget") == SortState(
        column="total_budget", descending=True
    )


def test_toggle_unknown_column():
    with pytest.raises(ValueError):
        toggle_sort(None, "actions")


def test_sort_rows_text_is_case_insensitive():
    rows = [{"name": "beta"}, {"name": "Alpha"}, {"name": "gamma"}]

    result = sort_rows(rows, SortState(column="name", descending=False))

    assert [row["name"] for row in result] == ["Alpha", "beta", "gamma"]


def test_sort_rows_missing_values_last_in_both_directions():
    rows = [{"email": None}, {"email": "b@x.io"}, {"email": "a@x.io"}]

    ascending = sort_rows(rows, SortState(column="email", descending=False))
    descending = sort_rows(rows, SortState(column="email", descending=True))

    assert [row["email"] for row in ascending] == ["a@x.io", "b@x.io", None]
    assert [row["email"] for row in descending] == ["b@x.io", "a@x.io", None]


def test_sort_rows_is_stable_for_ties():
    rows = [
        {"id": 1, "total_budget": Decimal("10")},
        {"id": 2, "total_budget": Decimal("50")},
        {"id": 3, "total_budget": Decimal("10")},
    ]

    result = sort_rows(rows, SortState(column="total_budget", descending=True))

    assert [row["id"] for row in result] == [2, 1, 3]


def test_sort_rows_without_state_keeps_fetch_order():
    now = datetime(2024, 1, 1)
    rows = [{"created_at": now}, {"created_at": now + timedelta(days=1)}]

    assert sort_rows(rows, None) == rows


def test_sort_rows_does_not_touch_input():
    rows = [{"project_count": 1}, {"project_count": 3}]

    sort_rows(rows, SortState(column="project_count", descending=True))

    assert [row["project_count"] for row in rows] == [1, 3]
