from __future__ import annotations

from typing import Any

import pytest
import sqlalchemy as sa
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from config.core import PagingConfig
from sqla_paging import (
    DAO,
    Cursors,
    GetPage,
    Paginate,
    Paging,
    PagingOptions,
    UnsupportedPrimaryKeyError,
    paginate,
    to_map,
)
from tests.integration.entities import CompositeItem, OrdinalItem
from tests.integration.utils import ids


pytestmark = pytest.mark.anyio


class CountingSource:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.lookups = 0

    async def scalar(self, statement: Any, /, *args: Any, **kw: Any) -> Any:
        self.lookups += 1
        return await self.session.scalar(statement, *args, **kw)

    async def scalars(self, statement: Any, /, *args: Any, **kw: Any) -> Any:
        return await self.session.scalars(statement, *args, **kw)

    async def execute(self, statement: Any, /, *args: Any, **kw: Any) -> Any:
        return await self.session.execute(statement, *args, **kw)


class BrokenSource(CountingSource):
    async def scalar(self, statement: Any, /, *args: Any, **kw: Any) -> Any:
        raise OperationalError(str(statement), {}, Exception("connection lost"))


async def test_get_page_returns_items_and_next_paging(seeded: AsyncSession) -> None:
    page = await GetPage[OrdinalItem](
        sa.select(OrdinalItem),
        {"limit": 4, "cursors": {"starting_after": 2}},
        chronological_field="inserted_at",
    )(seeded)

    assert ids(page.items) == [3, 4, 5, 6]
    assert page.paging == Paging(limit=4, has_more=True, cursors=Cursors(starting_after=6, ending_before=3))
    assert page.as_dict()["paging"] == {
        "limit": 4,
        "has_more": True,
        "cursors": {"starting_after": 6, "ending_before": 3},
    }


async def test_dao_walks_all_pages(seeded: AsyncSession, paging_config: PagingConfig) -> None:
    dao = DAO(seeded, OrdinalItem, paging_config)

    seen: list[int] = []
    page = await dao.get_page()
    seen.extend(ids(page.items))
    while page.paging.has_more:
        page = await dao.get_page(page.paging)
        seen.extend(ids(page.items))

    assert seen == list(range(1, 11))
    assert page.paging.cursors == Cursors(starting_after=10)


async def test_dao_applies_clauses(seeded: AsyncSession, paging_config: PagingConfig) -> None:
    dao = DAO(seeded, OrdinalItem, paging_config)

    page = await dao.get_page({"limit": 2, "cursors": {"ending_before": 8}}, OrdinalItem.id > 5)

    assert ids(page.items) == [6, 7]


async def test_dao_paginate_returns_statement(seeded: AsyncSession, paging_config: PagingConfig) -> None:
    stmt = await DAO(seeded, OrdinalItem, paging_config).paginate()

    assert isinstance(stmt, sa.Select)
    assert ids((await seeded.scalars(stmt)).all()) == [1, 2, 3]


async def test_single_lookup_per_call(seeded: AsyncSession) -> None:
    source = CountingSource(seeded)
    paging = {"limit": 2, "cursors": {"starting_after": 3, "ending_before": 8}}

    stmt = await Paginate(sa.select(OrdinalItem), paging, chronological_field="inserted_at")(source)

    assert source.lookups == 1
    assert ids((await seeded.scalars(stmt)).all()) == [4, 5]


async def test_no_lookup_without_cursor(seeded: AsyncSession) -> None:
    source = CountingSource(seeded)

    await paginate(sa.select(OrdinalItem), {"limit": 2}, PagingOptions(source, "inserted_at"))

    assert source.lookups == 0


async def test_data_source_errors_propagate(seeded: AsyncSession) -> None:
    source = BrokenSource(seeded)

    with pytest.raises(OperationalError):
        await paginate(
            sa.select(OrdinalItem),
            {"limit": 2, "cursors": {"ending_before": 3}},
            PagingOptions(source, "inserted_at"),
        )


async def test_composite_key_is_rejected(seeded: AsyncSession) -> None:
    with pytest.raises(UnsupportedPrimaryKeyError):
        await paginate(
            sa.select(CompositeItem),
            {"limit": 2, "cursors": {"starting_after": 1}},
            PagingOptions(seeded, "inserted_at"),
        )


async def test_next_paging_round_trips_through_map(seeded: AsyncSession) -> None:
    page = await GetPage[OrdinalItem](
        sa.select(OrdinalItem), {"limit": 5}, chronological_field="inserted_at"
    )(seeded)

    follow_up = await GetPage[OrdinalItem](
        sa.select(OrdinalItem), to_map(page.paging), chronological_field="inserted_at"
    )(seeded)

    assert ids(follow_up.items) == [6, 7, 8, 9, 10]
    assert follow_up.paging.has_more is True
