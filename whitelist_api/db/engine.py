"""Async SQLAlchemy engine and session factory for the record store.

Nothing here is created at import time: the app factory (and the CLI) build
an engine from Settings and hand the session factory to the request layer.
"""

from __future__ import annotations

from pathlib import Path
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from whitelist_api.config import Settings
from whitelist_api.models import Base

_SQLITE_PREFIX = "sqlite+aiosqlite:///"


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database URL."""
    url = settings.database_url
    kwargs: dict = {"echo": False}

    if url.startswith(_SQLITE_PREFIX):
        db_path = url[len(_SQLITE_PREFIX):]
        if db_path in ("", ":memory:"):
            # One shared connection, otherwise every checkout sees an empty DB
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        else:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    elif url.startswith("postgresql+asyncpg"):
        connect_args: dict = {"command_timeout": settings.store_timeout_seconds}
        if settings.database_ssl:
            connect_args["ssl"] = "require"
        kwargs["connect_args"] = connect_args
        kwargs["pool_pre_ping"] = True

    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create the tecnicos table if it does not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
