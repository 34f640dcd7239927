from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, Literal

import msgspec

from sqla_paging.app.common.tools import compact, convert_from, convert_to
from sqla_paging.app.contracts.exceptions import PagingValidationError


type SortOrder = Literal["ASC", "DESC"]

DEFAULT_LIMIT: Final[int] = 50


class Cursors(msgspec.Struct, frozen=True):
    """Pagination anchors.

    ``starting_after`` takes precedence over ``ending_before`` when both are set.
    """

    starting_after: Any = None
    ending_before: Any = None

    def is_empty(self) -> bool:
        return self.starting_after is None and self.ending_before is None


class Paging(msgspec.Struct, frozen=True):
    limit: int | None = DEFAULT_LIMIT
    cursors: Cursors = msgspec.field(default_factory=Cursors)
    has_more: bool | None = None
    size: int | None = None


type PagingLike = Paging | Mapping[str, Any]


def from_map(value: PagingLike) -> Paging:
    """Coerce a loose mapping into a :class:`Paging`.

    A ``Paging`` is returned unchanged. ``cursors`` may be a plain mapping or a
    ``Cursors`` instance. Unknown keys are ignored, missing keys take defaults.
    """
    if isinstance(value, Paging):
        return value

    data = dict(value)
    cursors = data.pop("cursors", None)
    try:
        paging = convert_to(Paging, data, strict=False)
        if cursors is not None and not isinstance(cursors, Cursors):
            cursors = convert_to(Cursors, cursors, strict=False)
    except msgspec.ValidationError as e:
        raise PagingValidationError(detail=str(e)) from e

    return msgspec.structs.replace(paging, cursors=cursors) if cursors is not None else paging


def to_map(paging: Paging) -> dict[str, Any]:
    return compact(convert_from(paging))


@dataclass(frozen=True, slots=True)
class CursorPage[T]:
    items: Sequence[T]
    paging: Paging

    def as_dict(self) -> dict[str, Any]:
        return {"items": list(self.items), "paging": to_map(self.paging)}
