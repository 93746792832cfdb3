"""Async engine, session factory and the per-request session dependency."""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from reader.core.config import get_settings

Base = declarative_base()

settings = get_settings()

engine = create_async_engine(settings.sqlalchemy_url, echo=settings.debug, pool_pre_ping=True)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request; it is closed (and rolled back if uncommitted) on every exit path."""
    async with AsyncSessionLocal() as session:
        yield session
