from __future__ import annotations

from collections.abc import Sequence
from typing import Any, override

import sqlalchemy as sa

from sqla_paging.app.contracts.connection import DataSource
from sqla_paging.app.contracts.metadata import KeyMetadataProvider
from sqla_paging.app.contracts.pagination import CursorPage, PagingLike, from_map
from sqla_paging.app.contracts.query import Query
from sqla_paging.infra.database.alchemy.metadata import SQLAlchemyKeyMetadata
from sqla_paging.infra.database.alchemy.paging import PagingOptions, get_next_paging, paginate
from sqla_paging.infra.database.alchemy.tools import get_entity


class Paginate(Query[DataSource, sa.Select[Any]]):
    """Rewrite a statement into a paginated one without executing it."""

    __slots__ = (
        "chronological_field",
        "key_metadata",
        "paging",
        "query",
    )

    def __init__(
        self,
        query: sa.Select[Any],
        paging: PagingLike,
        *,
        chronological_field: str,
        key_metadata: KeyMetadataProvider | None = None,
    ) -> None:
        self.query = query
        self.paging = from_map(paging)
        self.chronological_field = chronological_field
        self.key_metadata = key_metadata or SQLAlchemyKeyMetadata()

    @override
    async def __call__(self, conn: DataSource, /, **kw: Any) -> sa.Select[Any]:
        return await paginate(
            self.query,
            self.paging,
            PagingOptions(
                source=conn,
                chronological_field=self.chronological_field,
                key_metadata=self.key_metadata,
            ),
        )


class GetPage[T](Paginate):
    """Paginate, execute and compute the following paging in one call."""

    __slots__ = ("key",)

    def __init__(
        self,
        query: sa.Select[Any],
        paging: PagingLike,
        *,
        chronological_field: str,
        key: str = "id",
        key_metadata: KeyMetadataProvider | None = None,
    ) -> None:
        super().__init__(
            query,
            paging,
            chronological_field=chronological_field,
            key_metadata=key_metadata,
        )
        self.key = key

    @override
    async def __call__(  # type: ignore[override]
        self, conn: DataSource, /, **kw: Any
    ) -> CursorPage[T]:
        stmt = await super().__call__(conn, **kw)
        items = await self.fetch(conn, stmt, **kw)

        return CursorPage[T](
            items=items,
            paging=get_next_paging(items, self.paging, key=self.key),
        )

    async def fetch(self, conn: DataSource, stmt: sa.Select[Any], /, **kw: Any) -> Sequence[T]:
        params = kw.pop("params", None)
        if get_entity(self.query) is not None:
            return (await conn.scalars(stmt, params)).unique().all()

        return (await conn.execute(stmt, params)).all()
