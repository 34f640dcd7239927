from __future__ import annotations

from typing import NamedTuple

from sqla_paging.app.contracts.exceptions import AppError


class ResultImpl[T, E: Exception](NamedTuple):
    data: T | None
    err: E | None

    @classmethod
    def ok(cls, data: T) -> ResultImpl[T, E]:
        return cls(data, None)

    @classmethod
    def fail(cls, err: E) -> ResultImpl[T, E]:
        return cls(None, err)

    def unwrap(self) -> T:
        if self.data is None:
            if self.err is not None and isinstance(self.err, AppError):
                raise self.err
            raise AppError(
                "\n".join(str(arg) for arg in self.err.args) if self.err else "Empty result"
            ) from self.err

        return self.data

    def is_ok(self) -> bool:
        return self.data is not None

    def is_err(self) -> bool:
        return self.data is None
