"""Cursor based pagination for SQLAlchemy select statements."""

from sqla_paging.app.contracts.exceptions import (
    AppError,
    CursorNotFoundError,
    PagingValidationError,
    UnsupportedPrimaryKeyError,
)
from sqla_paging.app.contracts.metadata import KeyMetadataProvider, StorageKind
from sqla_paging.app.contracts.pagination import (
    DEFAULT_LIMIT,
    CursorPage,
    Cursors,
    Paging,
    from_map,
    to_map,
)
from sqla_paging.infra.database.alchemy.dao import DAO
from sqla_paging.infra.database.alchemy.metadata import SQLAlchemyKeyMetadata
from sqla_paging.infra.database.alchemy.paging import (
    PagingOptions,
    get_next_paging,
    infer_order,
    paginate,
    resolve_cursor,
)
from sqla_paging.infra.database.alchemy.queries import GetPage, Paginate


__all__ = (
    "DAO",
    "DEFAULT_LIMIT",
    "AppError",
    "CursorNotFoundError",
    "CursorPage",
    "Cursors",
    "GetPage",
    "KeyMetadataProvider",
    "Paginate",
    "Paging",
    "PagingOptions",
    "PagingValidationError",
    "SQLAlchemyKeyMetadata",
    "StorageKind",
    "UnsupportedPrimaryKeyError",
    "from_map",
    "get_next_paging",
    "infer_order",
    "paginate",
    "resolve_cursor",
    "to_map",
)
