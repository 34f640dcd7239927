from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

import msgspec


def convert_to[T](cls: type[T], value: Any, **kw: Any) -> T:
    return msgspec.convert(
        value,
        cls,
        dec_hook=kw.pop("dec_hook", None),
        builtin_types=(bytes, bytearray, datetime, time, date, timedelta, uuid.UUID, Decimal),
        **kw,
    )


def convert_from(value: Any, **kw: Any) -> Any:
    return msgspec.to_builtins(
        value,
        builtin_types=(
            datetime,
            date,
            timedelta,
            Decimal,
            uuid.UUID,
            bytes,
            bytearray,
            memoryview,
            time,
        ),
        **kw,
    )


def compact(value: Mapping[str, Any]) -> dict[str, Any]:
    """Drop ``None`` values and empty nested mappings, recursively."""
    out: dict[str, Any] = {}
    for k, v in value.items():
        if isinstance(v, Mapping):
            v = compact(v)
            if not v:
                continue
        elif v is None:
            continue
        out[k] = v

    return out
