"""Async SQLAlchemy engine and session factory.

Uses psycopg3, which serves both the async runtime and Alembic's sync
migrations from the same ``postgresql+psycopg://`` URL.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


def create_engine(database_url: str, **kwargs: object) -> AsyncEngine:
    """Create an async engine sized for a single-table options workload.

    The plugin issues one small read per page render and a rare write from
    the admin page, so the pool stays small:

    - **pool_size=2**, **max_overflow=4**
    - **pool_pre_ping=True** to survive server-side disconnects
    - **pool_recycle=3600** to drop connections idle firewalls may have cut

    All defaults can be overridden via *kwargs*.
    """
    defaults = {
        "echo": False,
        "pool_size": 2,
        "max_overflow": 4,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }
    defaults.update(kwargs)  # type: ignore[arg-type]
    return create_async_engine(database_url, **defaults)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to *engine* (``expire_on_commit=False``)."""
    return async_sessionmaker(engine, expire_on_commit=False)
