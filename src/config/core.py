from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import quote

from pydantic_settings import BaseSettings, SettingsConfigDict


if TYPE_CHECKING:
    import _typeshed


def root_dir() -> Path:
    return Path(__file__).resolve().parent.parent.parent


def absolute_path(
    *paths: _typeshed.StrPath | Path,
    base_path: _typeshed.StrPath | Path | None = None,
) -> str:
    if base_path is None:
        base_path = root_dir()

    return os.path.join(base_path, *paths)  # noqa: PTH118


class DbConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=absolute_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="DB_",
        extra="ignore",
    )
    driver: str = "sqlite+aiosqlite"
    name: str = ":memory:"
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None

    def url(self) -> str:
        if self.driver.startswith("sqlite"):
            return f"{self.driver}:///{self.name}"

        return (
            f"{self.driver}://{self.user}:{quote(self.password or '')}@"
            f"{self.host}:{self.port}/{self.name}"
        )


class PagingConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=absolute_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="PAGING_",
        extra="ignore",
    )
    default_limit: int = 50
    chronological_field: str = "inserted_at"
    key: str = "id"


class BackendConfig(BaseSettings):
    db: DbConfig
    paging: PagingConfig


def load_config(
    db: DbConfig | None = None,
    paging: PagingConfig | None = None,
) -> BackendConfig:
    return BackendConfig(
        db=db or DbConfig(),
        paging=paging or PagingConfig(),
    )
