from .common import (
    FromSource,
    get_column,
    get_direction,
    get_entity,
    get_order_clauses,
    get_primary_key,
    get_source,
    get_source_table,
    ordered,
    reverse,
    unwrap_table,
)


__all__ = (
    "FromSource",
    "get_column",
    "get_direction",
    "get_entity",
    "get_order_clauses",
    "get_primary_key",
    "get_source",
    "get_source_table",
    "ordered",
    "reverse",
    "unwrap_table",
)
