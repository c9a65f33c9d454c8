"""
CryptoLedger - Database Connection
"""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from loguru import logger

from cryptoledger.config import settings


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; pool sizing only applies to server databases."""
    if url.startswith("sqlite"):
        return create_async_engine(url, echo=echo)
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
    )


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Create async engine
engine = build_engine(settings.database_url, echo=settings.DB_ECHO)

# Create async session factory
async_session_maker = build_session_maker(engine)

# Base class for models
Base = declarative_base()


async def init_db(bind: AsyncEngine = None) -> None:
    """Initialize database tables."""
    bind = bind or engine
    async with bind.begin() as conn:
        # Import all models here to ensure they're registered
        from cryptoledger.db.models import user, wallet, asset, position, transaction  # noqa: F401

        # Create all tables
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created/verified")


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting database session.

    Services own their transaction boundaries, so the session is only
    closed here, never committed.
    """
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()
