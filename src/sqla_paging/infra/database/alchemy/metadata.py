from __future__ import annotations

from typing import Any, Final, override

import sqlalchemy as sa

from sqla_paging.app.contracts.metadata import KeyMetadataProvider, StorageKind
from sqla_paging.infra.database.alchemy.tools import get_column, get_primary_key, get_source_table


_KINDS_BY_PYTHON_TYPE: Final[dict[type[Any], StorageKind]] = {
    int: StorageKind.ORDINAL,
    str: StorageKind.STRING,
}


def classify(column: sa.ColumnElement[Any]) -> StorageKind:
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return StorageKind.OPAQUE_BINARY

    # bool is an int subclass but never an insertion-ordered key
    if python_type is bool:
        return StorageKind.OPAQUE_BINARY

    for typ, kind in _KINDS_BY_PYTHON_TYPE.items():
        if issubclass(python_type, typ):
            return kind

    return StorageKind.OPAQUE_BINARY


class SQLAlchemyKeyMetadata(KeyMetadataProvider):
    __slots__ = ()

    @override
    def primary_key(self, query: sa.Select[Any]) -> str:
        return get_primary_key(get_source_table(query)).name

    @override
    def storage_kind(self, query: sa.Select[Any], field: str) -> StorageKind:
        return classify(get_column(get_source_table(query), field))
