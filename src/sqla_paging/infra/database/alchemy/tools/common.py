from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import sqlalchemy as sa
from sqlalchemy.sql import operators

from sqla_paging.app.contracts.exceptions import UnsupportedPrimaryKeyError
from sqla_paging.app.contracts.pagination import SortOrder


type FromSource = sa.Table | sa.Alias

_NULLS_MODIFIERS = frozenset(
    {
        operators.nulls_first_op,
        operators.nulls_last_op,
    }
)


def unwrap_table(source: Any) -> sa.Table | None:
    node = source
    while isinstance(node, sa.Alias):
        node = node.element

    return node if isinstance(node, sa.Table) else None


def get_source(query: sa.Select[Any]) -> FromSource:
    """Return the FROM element the statement reads its rows from.

    Only the first FROM element is considered. Joins are followed down their
    left side, so the result is the root table or an alias of it.
    """
    for root in query.get_final_froms():
        node: Any = root
        while isinstance(node, sa.Join):
            node = node.left
        if unwrap_table(node) is not None:
            return node
        break

    raise UnsupportedPrimaryKeyError("Statement does not select from a table", statement=str(query))


def get_source_table(query: sa.Select[Any]) -> sa.Table:
    table = unwrap_table(get_source(query))
    if table is None:
        raise UnsupportedPrimaryKeyError("Statement does not select from a table", statement=str(query))

    return table


def get_entity(query: sa.Select[Any]) -> Any | None:
    """Return the mapped class (or alias) of an ORM entity select, ``None`` for Core selects."""
    descriptions = query.column_descriptions
    if len(descriptions) != 1:
        return None

    entity = descriptions[0].get("entity")
    expr = descriptions[0].get("expr")
    if entity is not None and expr is entity:
        return entity

    return None


def get_primary_key(table: sa.Table) -> sa.Column[Any]:
    columns: Sequence[sa.Column[Any]] = list(table.primary_key.columns)
    if len(columns) != 1:
        raise UnsupportedPrimaryKeyError(table=table.name, columns=[c.name for c in columns])

    return columns[0]


def get_column(source: FromSource, name: str) -> sa.ColumnElement[Any]:
    try:
        return source.c[name]
    except KeyError as e:
        raise UnsupportedPrimaryKeyError(
            f"Column `{name}` does not exist",
            table=source.name,
        ) from e


def get_order_clauses(query: sa.Select[Any]) -> Sequence[sa.ColumnElement[Any]]:
    # SQLAlchemy 2.0 has no public accessor for the ORDER BY terms of a Select
    return tuple(query._order_by_clauses)  # noqa: SLF001


def get_direction(clause: sa.ColumnElement[Any]) -> SortOrder:
    """Direction of a single ORDER BY term, a bare expression is ascending."""
    node: Any = clause
    while isinstance(node, sa.UnaryExpression) and node.modifier in _NULLS_MODIFIERS:
        node = node.element

    if isinstance(node, sa.UnaryExpression) and node.modifier is operators.desc_op:
        return "DESC"

    return "ASC"


def ordered(column: sa.ColumnElement[Any], direction: SortOrder) -> sa.UnaryExpression[Any]:
    return column.desc() if direction == "DESC" else column.asc()


def reverse(direction: SortOrder) -> SortOrder:
    return "ASC" if direction == "DESC" else "DESC"
