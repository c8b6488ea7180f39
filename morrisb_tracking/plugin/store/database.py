"""PostgreSQL options store.

Options are rows of the ``options`` table (see ``db/tables.py``)::

    option_name (PK) | option_value | created_at | updated_at

``set`` is a single ``INSERT ... ON CONFLICT DO UPDATE`` so concurrent saves
resolve as last-write-wins without a read-modify-write.
"""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from morrisb_tracking.plugin.db.engine import create_engine, create_session_factory
from morrisb_tracking.plugin.db.tables import Option


class DatabaseOptionsStore:
    """PostgreSQL implementation of the OptionsStore protocol.

    Pass ``engine`` when the store should dispose of it on ``aclose``.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> DatabaseOptionsStore:
        engine = create_engine(database_url)
        return cls(create_session_factory(engine), engine=engine)

    async def get(self, key: str) -> str | None:
        async with self._session_factory() as db:
            option = await db.get(Option, key)
            return None if option is None else option.option_value

    async def set(self, key: str, value: str) -> None:
        stmt = insert(Option).values(option_name=key, option_value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Option.option_name],
            set_={"option_value": stmt.excluded.option_value, "updated_at": func.now()},
        )
        async with self._session_factory() as db:
            await db.execute(stmt)
            await db.commit()

    async def aclose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
