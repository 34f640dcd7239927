from __future__ import annotations

import enum
from typing import Any, Protocol, runtime_checkable


@enum.unique
class StorageKind(enum.StrEnum):
    ORDINAL = enum.auto()
    STRING = enum.auto()
    OPAQUE_BINARY = enum.auto()


@runtime_checkable
class KeyMetadataProvider(Protocol):
    def primary_key(self, query: Any) -> str: ...
    def storage_kind(self, query: Any, field: str) -> StorageKind: ...
