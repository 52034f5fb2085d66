"""
Single-column sort state for the clients table.

Clicking a header cycles that column through its first direction, the opposite
direction and back to unsorted. Text columns start ascending, numeric and date
columns start descending. Sorting only re-orders rows that were already fetched.
"""

from typing import Any, Callable, List, Mapping, Optional, Sequence

from pydantic import BaseModel


TEXT_COLUMNS = ("name", "email", "status")
DESCENDING_FIRST_COLUMNS = ("project_count", "total_budget", "created_at")
SORTABLE_COLUMNS = TEXT_COLUMNS + DESCENDING_FIRST_COLUMNS


class SortState(BaseModel):
    """The one active sort key of the table."""
    column: str
    descending: bool

    class Config:
        frozen = True

    @property
    def direction(self) -> str:
        return "desc" if self.descending else "asc"


DEFAULT_SORT = SortState(column="created_at", descending=True)


def _check_column(column: str) -> None:
    if column not in SORTABLE_COLUMNS:
        raise ValueError(f"Column '{column}' is not sortable")


def first_direction_descending(column: str) -> bool:
    _check_column(column)
    return column in DESCENDING_FIRST_COLUMNS


def toggle_sort(current: Optional[SortState], column: str) -> Optional[SortState]:
    """
    Next sort state after a click on `column`'s header.

    Returns:
        The new state, or None when the click clears sorting
    """
    first_desc = first_direction_descending(column)
    if current is None or current.column != column:
        return SortState(column=column, descending=first_desc)
    if current.descending == first_desc:
        return SortState(column=column, descending=not first_desc)
    return None


def sort_rows(
    rows: Sequence[Any],
    state: Optional[SortState],
    key: Callable[[Any, str], Any] = None,
) -> List[Any]:
    """
    Return the rows ordered by the sort state.
    With no state the fetch order is kept. Missing values always sort last.
    The sort is stable, so equal values keep their fetch order.
    """
    if state is None:
        return list(rows)
    _check_column(state.column)
    get = key or _row_value

    present = [row for row in rows if get(row, state.column) is not None]
    missing = [row for row in rows if get(row, state.column) is None]
    present.sort(key=lambda row: _comparable(get(row, state.column)), reverse=state.descending)
    return present + missing


def _row_value(row: Any, column: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(column)
    return getattr(row, column, None)


def _comparable(value: Any) -> Any:
    if isinstance(value, str):
        return value.casefold()
    return value

