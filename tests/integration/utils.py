import uuid
from collections.abc import Sequence
from typing import Any

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from sqla_paging import PagingOptions, paginate
from sqla_paging.app.contracts.pagination import PagingLike


CHRONOLOGICAL_FIELD = "inserted_at"


def make_uuid(i: int) -> uuid.UUID:
    # uuid order runs opposite to insertion order
    return uuid.UUID(int=(100 - i) * 0x1_0000_0000_0000_0000_0000_0001)


def string_key(i: int, total: int = 10) -> str:
    return f"key-{total + 1 - i:02d}"


async def fetch_page(
    session: AsyncSession,
    query: sa.Select[Any],
    paging: PagingLike,
) -> Sequence[Any]:
    stmt = await paginate(
        query,
        paging,
        PagingOptions(source=session, chronological_field=CHRONOLOGICAL_FIELD),
    )

    return (await session.scalars(stmt)).all()


async def fetch_rows(
    session: AsyncSession,
    query: sa.Select[Any],
    paging: PagingLike,
) -> Sequence[Any]:
    stmt = await paginate(
        query,
        paging,
        PagingOptions(source=session, chronological_field=CHRONOLOGICAL_FIELD),
    )

    return (await session.execute(stmt)).all()


def ids(rows: Sequence[Any]) -> list[Any]:
    return [row.id for row in rows]
