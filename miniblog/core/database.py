from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy import text
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession


class Database:
    """Owns the async engine and hands out sessions.

    Constructed once per application and passed to the repositories that
    need it, so tests can point an app at a throwaway store.
    """

    def __init__(self, db_url: str, echo: bool = False):
        self.url = db_url
        self.engine = create_async_engine(db_url, echo=echo)

    async def connect(self) -> None:
        """Open a connection once so a bad URL fails at startup."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def disconnect(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, Any]:
        async with AsyncSession(self.engine, expire_on_commit=False) as session:
            yield session
