from .base import GetPage, Paginate


__all__ = (
    "GetPage",
    "Paginate",
)
