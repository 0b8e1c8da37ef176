import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

import addon.models  # noqa: F401
from addon.core.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_uri,
    echo=False,
    future=True,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db() -> None:
    logger.info("Creating tables on %s", engine.url.render_as_string())
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
