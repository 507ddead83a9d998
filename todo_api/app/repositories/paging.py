"""Helpers translating a ``PageWindow`` into SQL."""

from typing import Iterable, Tuple

from todo_api.app.schemas.page import PageWindow


def order_and_limit(window: PageWindow, allowed_sorts: Iterable[str], default_sort: str) -> Tuple[str, list]:
    """Return the ``ORDER BY ... LIMIT ? OFFSET ?`` suffix and its parameters.

    Unknown sort keys fall back to ``default_sort`` and unknown
    directions to ascending.  The default column is appended as a tie
    breaker so page boundaries are stable.
    """
    sort_by = window.sort_by if window.sort_by in set(allowed_sorts) else default_sort
    order = window.order.lower()
    if order not in {"asc", "desc"}:
        order = "asc"
    clause = f" ORDER BY {sort_by} {order}"
    if sort_by != default_sort:
        clause += f", {default_sort} asc"
    clause += " LIMIT ? OFFSET ?"
    return clause, [window.limit, window.offset]
