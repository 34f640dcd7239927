from __future__ import annotations

from typing import Any, ClassVar


class AppError(Exception):
    message: ClassVar[str] = "Paging error"

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message or self.message)
        self.content: dict[str, Any] = {"message": message or self.message}
        if code:
            self.content["code"] = code

    def __repr__(self) -> str:
        content = ", ".join(f"{key}={value!r}" for key, value in self.content.items())
        return f"{type(self).__name__}({content})"


class DetailedError(AppError):
    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message=message, code=code)
        self.content = {**self.content, **context}

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.content!r}"


class NotFoundError(DetailedError):
    message: ClassVar[str] = "Not Found"


class BadRequestError(DetailedError):
    message: ClassVar[str] = "Bad Request"


class CursorNotFoundError(NotFoundError):
    """The cursor does not identify an existing row."""

    message: ClassVar[str] = "Cursor row not found"


class PagingValidationError(BadRequestError):
    message: ClassVar[str] = "Invalid paging parameters"


class UnsupportedPrimaryKeyError(DetailedError):
    message: ClassVar[str] = "Pagination requires exactly one primary key column"
