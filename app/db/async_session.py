from contextlib import asynccontextmanager
from typing import AsyncIterator
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.dialects import postgresql, sqlite
from app.core.config import settings
from app.utils.logger import get_logger
from datetime import datetime, timezone

logger = get_logger("db")

engine_options = {"echo": False, "pool_pre_ping": True}
if not settings.ASYNC_DATABASE_URL.startswith("sqlite"):
    engine_options.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_recycle=3600,  # Recycle connections after 1 hour
    )

async_engine = create_async_engine(settings.ASYNC_DATABASE_URL, **engine_options)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()

def utc_now():
    return datetime.now(timezone.utc)

async def get_async_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run a block of statements as one unit of work.

    Commits when the block exits normally. Any exception rolls the whole
    unit back and is re-raised to the caller.
    """
    try:
        yield db
        await db.commit()
    except Exception:
        logger.warning("Rolling back transaction")
        await db.rollback()
        raise


def dialect_insert(db: AsyncSession, table):
    """Insert construct supporting ON CONFLICT for the session's dialect"""
    if db.get_bind().dialect.name == "sqlite":
        return sqlite.insert(table)
    return postgresql.insert(table)
