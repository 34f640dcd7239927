from __future__ import annotations

from typing import Any

import sqlalchemy as sa

from config.core import PagingConfig
from sqla_paging.app.contracts.connection import DataSource
from sqla_paging.app.contracts.pagination import CursorPage, Paging, PagingLike

from .queries import base


class DAO[E]:
    __slots__ = (
        "_config",
        "_conn",
        "_entity",
    )

    def __init__(
        self,
        conn: DataSource,
        entity: type[E],
        config: PagingConfig | None = None,
    ) -> None:
        self._conn = conn
        self._entity = entity
        self._config = config or PagingConfig()

    def _paging(self, paging: PagingLike | None) -> PagingLike:
        return paging if paging is not None else Paging(limit=self._config.default_limit)

    def select(self, *clauses: sa.ColumnExpressionArgument[bool]) -> sa.Select[tuple[E]]:
        return sa.select(self._entity).where(*clauses)

    async def paginate(
        self,
        paging: PagingLike | None = None,
        *clauses: sa.ColumnExpressionArgument[bool],
        **kw: Any,
    ) -> sa.Select[Any]:
        return await base.Paginate(
            self.select(*clauses),
            self._paging(paging),
            chronological_field=self._config.chronological_field,
        )(self._conn, **kw)

    async def get_page(
        self,
        paging: PagingLike | None = None,
        *clauses: sa.ColumnExpressionArgument[bool],
        **kw: Any,
    ) -> CursorPage[E]:
        return await base.GetPage[E](
            self.select(*clauses),
            self._paging(paging),
            chronological_field=self._config.chronological_field,
            key=self._config.key,
        )(self._conn, **kw)
