"""Async database engine, session factory and declarative base (SQLAlchemy 2.0)."""
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine, AsyncSession
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all models."""

    pass


def build_engine(database_url: str, *, echo: bool = False, **kwargs) -> AsyncEngine:
    """Async engine; same URL as Alembic (postgresql+asyncpg://...)."""
    return create_async_engine(database_url, echo=echo, future=True, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by the record store; objects stay usable after commit."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


async def create_all(engine: AsyncEngine) -> None:
    """Create every table from metadata (local dev and tests; production uses Alembic)."""
    import content_studio.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
