import uuid

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

import addon.models  # noqa: F401
from addon.models.user import User


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        future=True,
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def test_db_session(session_factory) -> AsyncSession:
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


async def _create_user(session: AsyncSession, username: str) -> User:
    user = User(username=username, email=f"{username.lower()}@example.com")
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_host(test_db_session) -> User:
    return await _create_user(test_db_session, "Host")


@pytest_asyncio.fixture
async def test_users(test_db_session) -> list[User]:
    return [
        await _create_user(test_db_session, f"Climber{i}") for i in range(1, 12)
    ]


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def game_id():
    return uuid.uuid4()
