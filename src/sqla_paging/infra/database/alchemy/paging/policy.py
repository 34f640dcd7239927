from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from sqla_paging.app.contracts.metadata import StorageKind


@dataclass(frozen=True, slots=True)
class KeyOrderPolicy:
    """Which field defines order when the query carries no ORDER BY.

    Ordinal keys grow with insertion, so they are ordered directly. Other keys
    fall back to the chronological field.
    """

    by_primary_key: bool

    def field(self, primary_key: str, chronological_field: str) -> str:
        return primary_key if self.by_primary_key else chronological_field


KEY_ORDER_POLICIES: Final[Mapping[StorageKind, KeyOrderPolicy]] = MappingProxyType(
    {
        StorageKind.ORDINAL: KeyOrderPolicy(by_primary_key=True),
        StorageKind.STRING: KeyOrderPolicy(by_primary_key=False),
        StorageKind.OPAQUE_BINARY: KeyOrderPolicy(by_primary_key=False),
    }
)


def policy_for(kind: StorageKind) -> KeyOrderPolicy:
    return KEY_ORDER_POLICIES[kind]
