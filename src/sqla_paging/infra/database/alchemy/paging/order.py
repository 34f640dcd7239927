from __future__ import annotations

from typing import Any

import sqlalchemy as sa

from sqla_paging.app.contracts.pagination import SortOrder
from sqla_paging.infra.database.alchemy.tools import get_direction, get_order_clauses


def infer_order(query: sa.Select[Any]) -> SortOrder | None:
    """Direction of the first explicit ORDER BY term, ``None`` without one.

    Later terms are not inspected.
    """
    clauses = get_order_clauses(query)
    if not clauses:
        return None

    return get_direction(clauses[0])


def has_explicit_order(query: sa.Select[Any]) -> bool:
    return bool(get_order_clauses(query))
