from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .connection import DataSource


@runtime_checkable
class Query[C: DataSource, R](Protocol):
    async def __call__(self, conn: C, /, **kw: Any) -> R: ...
