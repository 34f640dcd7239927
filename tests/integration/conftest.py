from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime, timedelta
from typing import Final

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from config.core import DbConfig, PagingConfig
from tests.integration.entities import Entity, OrdinalItem, StringItem, UuidItem
from tests.integration.utils import make_uuid, string_key


BASE_TIME: Final[datetime] = datetime(2024, 1, 1, 12, 0, 0)
ITEMS_COUNT: Final[int] = 10


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(scope="session")
def db_config() -> DbConfig:
    return DbConfig(driver="sqlite+aiosqlite", name=":memory:")


@pytest.fixture(scope="session")
def paging_config() -> PagingConfig:
    return PagingConfig(default_limit=3, chronological_field="inserted_at", key="id")


@pytest.fixture(scope="function")
async def engine(db_config: DbConfig) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(db_config.url(), poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Entity.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async with async_sessionmaker(engine, expire_on_commit=False, autoflush=False)() as session:
        yield session


@pytest.fixture(scope="function")
async def seeded(session: AsyncSession) -> AsyncSession:
    """Ten rows per table, ``inserted_at`` growing by one minute per row.

    String and UUID keys are deliberately not in insertion order.
    """
    for i in range(1, ITEMS_COUNT + 1):
        inserted_at = BASE_TIME + timedelta(minutes=i)
        session.add_all(
            [
                OrdinalItem(id=i, name=f"item-{i}", inserted_at=inserted_at),
                StringItem(id=string_key(i, ITEMS_COUNT), inserted_at=inserted_at),
                UuidItem(id=make_uuid(i), inserted_at=inserted_at),
            ]
        )

    await session.commit()

    return session
