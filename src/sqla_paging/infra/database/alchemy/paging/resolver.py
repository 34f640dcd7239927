from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from typing import Any, Final

import sqlalchemy as sa

from sqla_paging.app.contracts.connection import DataSource
from sqla_paging.app.contracts.exceptions import CursorNotFoundError
from sqla_paging.app.contracts.metadata import StorageKind
from sqla_paging.infra.database.alchemy.tools import get_column
from sqla_paging.infra.shared.result import ResultImpl


logger = logging.getLogger(__name__)

type CursorResult = ResultImpl[Any, CursorNotFoundError]


def _to_ordinal(value: Any, _: sa.Column[Any]) -> int:
    if isinstance(value, str):
        return int(value)
    # bool is an int subclass
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    raise TypeError(f"Cursor {value!r} is not an integer key")


def _to_opaque(value: Any, column: sa.Column[Any]) -> Any:
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value

    if python_type is uuid.UUID and not isinstance(value, uuid.UUID):
        return uuid.UUID(str(value))

    return value


_COERCERS: Final[dict[StorageKind, Callable[[Any, sa.Column[Any]], Any]]] = {
    StorageKind.ORDINAL: _to_ordinal,
    StorageKind.STRING: lambda value, _: str(value),
    StorageKind.OPAQUE_BINARY: _to_opaque,
}


def coerce_cursor(value: Any, kind: StorageKind, column: sa.Column[Any]) -> Any:
    """Cast a cursor into the python type of the primary key column.

    Raises ``ValueError`` or ``TypeError`` for values that cannot be cast.
    """
    return _COERCERS[kind](value, column)


async def resolve_cursor(
    source: DataSource,
    table: sa.Table,
    primary_key: str,
    kind: StorageKind,
    value: Any,
    chronological_field: str,
) -> CursorResult:
    """Look up the chronological value of the row identified by ``value``.

    A missing row is reported through the result, not raised. Errors from the
    data source propagate unchanged.
    """
    pk = get_column(table, primary_key)
    chronological = get_column(table, chronological_field)

    try:
        pk_value = coerce_cursor(value, kind, pk)
    except (TypeError, ValueError):
        logger.info("Cursor %r is not a valid %s key of `%s`", value, kind, table.name)
        return ResultImpl.fail(
            CursorNotFoundError(table=table.name, cursor=repr(value)),
        )

    stmt = sa.select(chronological).where(pk == pk_value).limit(1)
    timestamp = await source.scalar(stmt)

    if timestamp is None:
        logger.info("Cursor %r does not match any row of `%s`", value, table.name)
        return ResultImpl.fail(
            CursorNotFoundError(table=table.name, cursor=repr(value)),
        )

    return ResultImpl.ok(timestamp)
