from .next_page import get_next_cursors, get_next_paging
from .order import infer_order
from .policy import KEY_ORDER_POLICIES, KeyOrderPolicy, policy_for
from .resolver import coerce_cursor, resolve_cursor
from .rewriter import BackwardPlan, PagingOptions, paginate


__all__ = (
    "KEY_ORDER_POLICIES",
    "BackwardPlan",
    "KeyOrderPolicy",
    "PagingOptions",
    "coerce_cursor",
    "get_next_cursors",
    "get_next_paging",
    "infer_order",
    "paginate",
    "policy_for",
    "resolve_cursor",
)
