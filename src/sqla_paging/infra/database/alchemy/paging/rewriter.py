from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import sqlalchemy as sa
from sqlalchemy import orm

from sqla_paging.app.contracts.connection import DataSource
from sqla_paging.app.contracts.metadata import KeyMetadataProvider, StorageKind
from sqla_paging.app.contracts.pagination import PagingLike, SortOrder, from_map
from sqla_paging.infra.database.alchemy.metadata import SQLAlchemyKeyMetadata
from sqla_paging.infra.database.alchemy.tools import (
    FromSource,
    get_column,
    get_entity,
    get_source,
    get_source_table,
    ordered,
    reverse,
)

from .order import has_explicit_order, infer_order
from .policy import policy_for
from .resolver import CursorResult, resolve_cursor


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PagingOptions:
    source: DataSource
    chronological_field: str
    key_metadata: KeyMetadataProvider = field(default_factory=SQLAlchemyKeyMetadata)


@dataclass(frozen=True, slots=True)
class _Target:
    source: FromSource
    table: sa.Table
    primary_key: str
    kind: StorageKind
    chronological_field: str

    @property
    def chronological(self) -> sa.ColumnElement[Any]:
        return self.column(self.chronological_field)

    @property
    def default_order_field(self) -> str:
        return policy_for(self.kind).field(self.primary_key, self.chronological_field)

    def column(self, name: str) -> sa.ColumnElement[Any]:
        return get_column(self.source, name)


@dataclass(frozen=True, slots=True)
class BackwardPlan:
    """State shared by the flip and restore passes of ``ending_before``.

    ``order_field`` orders both passes; the inner pass runs in the reverse of
    ``direction`` and the outer pass restores ``direction``.
    """

    order_field: str
    direction: SortOrder
    explicit: bool

    @classmethod
    def infer(cls, query: sa.Select[Any], target: _Target) -> BackwardPlan:
        direction = infer_order(query)
        if direction is None:
            return cls(order_field=target.default_order_field, direction="ASC", explicit=False)

        return cls(order_field=target.chronological_field, direction=direction, explicit=True)

    def filter(self, query: sa.Select[Any], target: _Target, timestamp: Any) -> sa.Select[Any]:
        chronological = target.chronological
        if self.direction == "DESC":
            return query.where(chronological > timestamp)

        return query.where(chronological < timestamp)

    def flip(self, query: sa.Select[Any], target: _Target) -> sa.Select[Any]:
        column = target.column(self.order_field)
        if self.explicit:
            query = query.order_by(None)

        return query.order_by(ordered(column, reverse(self.direction)))

    def restore(self, query: sa.Select[Any], target: _Target) -> sa.Select[Any]:
        """Wrap the flipped statement and order the outer select by ``direction``.

        An order column missing from the projection is carried through the
        subquery and left out of the outer select.
        """
        column = target.column(self.order_field)
        entity = get_entity(query)
        width = len(query.selected_columns)

        subq = query.subquery()
        order_column = subq.corresponding_column(column)
        if order_column is None:
            subq = query.add_columns(column).subquery()
            order_column = subq.corresponding_column(column)

        if entity is not None:
            outer = sa.select(orm.aliased(sa.inspect(entity).mapper.class_, subq))
        else:
            outer = sa.select(*list(subq.c)[:width])

        return outer.order_by(ordered(order_column, self.direction))


def is_valid_limit(limit: Any) -> bool:
    return isinstance(limit, int) and not isinstance(limit, bool) and limit > 0


async def paginate(
    query: sa.Select[Any] | sa.Table | type[Any],
    paging: PagingLike,
    options: PagingOptions,
) -> sa.Select[Any]:
    """Rewrite ``query`` to return the window described by ``paging``.

    ``starting_after`` is used when both cursors are set. A cursor that does
    not resolve to a row yields a statement matching nothing. A mapped class
    or a table is turned into a plain select first.
    """
    if not isinstance(query, sa.Select):
        query = sa.select(query)

    paging = from_map(paging)
    if not is_valid_limit(paging.limit):
        return query

    query = query.limit(paging.limit)
    cursors = paging.cursors

    if cursors.starting_after is not None:
        return await _starting_after(query, cursors.starting_after, options)
    if cursors.ending_before is not None:
        return await _ending_before(query, cursors.ending_before, options)

    return query


def _target(query: sa.Select[Any], options: PagingOptions) -> _Target:
    primary_key = options.key_metadata.primary_key(query)

    return _Target(
        source=get_source(query),
        table=get_source_table(query),
        primary_key=primary_key,
        kind=options.key_metadata.storage_kind(query, primary_key),
        chronological_field=options.chronological_field,
    )


async def _resolve(target: _Target, cursor: Any, options: PagingOptions) -> CursorResult:
    return await resolve_cursor(
        options.source,
        target.table,
        target.primary_key,
        target.kind,
        cursor,
        target.chronological_field,
    )


async def _starting_after(
    query: sa.Select[Any], cursor: Any, options: PagingOptions
) -> sa.Select[Any]:
    target = _target(query, options)
    result = await _resolve(target, cursor, options)
    if result.is_err():
        return query.where(sa.false())
    timestamp = result.unwrap()

    query = query.where(target.chronological > timestamp)
    if has_explicit_order(query):
        return query

    logger.debug("Ordering `%s` by `%s` ASC", target.source.name, target.default_order_field)

    return query.order_by(target.column(target.default_order_field).asc())


async def _ending_before(
    query: sa.Select[Any], cursor: Any, options: PagingOptions
) -> sa.Select[Any]:
    target = _target(query, options)
    result = await _resolve(target, cursor, options)
    if result.is_err():
        return query.where(sa.false())
    timestamp = result.unwrap()

    plan = BackwardPlan.infer(query, target)
    logger.debug(
        "Backward window on `%s` by `%s` %s (explicit=%s)",
        target.source.name,
        plan.order_field,
        plan.direction,
        plan.explicit,
    )

    query = plan.filter(query, target, timestamp)
    query = plan.flip(query, target)

    return plan.restore(query, target)
