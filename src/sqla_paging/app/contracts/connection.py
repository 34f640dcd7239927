from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DataSource(Protocol):
    async def scalar(self, statement: Any, /, *args: Any, **kw: Any) -> Any: ...
    async def scalars(self, statement: Any, /, *args: Any, **kw: Any) -> Any: ...
    async def execute(self, statement: Any, /, *args: Any, **kw: Any) -> Any: ...
