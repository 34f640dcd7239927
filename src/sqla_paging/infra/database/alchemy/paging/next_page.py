from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqla_paging.app.contracts.pagination import Cursors, Paging, PagingLike, from_map


def row_key(row: Any, key: str) -> Any:
    if isinstance(row, Mapping):
        return row[key]

    return getattr(row, key)


def get_next_cursors(rows: Sequence[Any], *, has_more: bool, key: str = "id") -> Cursors:
    if not rows:
        return Cursors()

    if not has_more:
        return Cursors(starting_after=row_key(rows[-1], key))

    return Cursors(
        starting_after=row_key(rows[-1], key),
        ending_before=row_key(rows[0], key),
    )


def get_next_paging(rows: Sequence[Any], paging: PagingLike, *, key: str = "id") -> Paging:
    """Build the paging that fetches the page following ``rows``.

    Without a limit on ``paging`` the number of fetched rows is used instead.
    """
    paging = from_map(paging)
    limit = paging.limit if paging.limit is not None else len(rows)
    has_more = len(rows) >= limit

    return Paging(
        limit=limit,
        has_more=has_more,
        cursors=get_next_cursors(rows, has_more=has_more, key=key),
    )
