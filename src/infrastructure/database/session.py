"""Database engine and session lifecycle."""

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the async engine and session factory for one application.

    Created at startup and disposed at shutdown; nothing in the process
    holds a connection outside of it.
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs: Any) -> None:
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a database for the configured PostgreSQL URL."""
        url = settings.async_database_url
        connect_args: dict[str, Any] = {}
        if url.startswith("postgresql+asyncpg"):
            connect_args["timeout"] = settings.database_connect_timeout
        return cls(
            url,
            echo=settings.debug,
            pool_pre_ping=True,
            connect_args=connect_args,
        )

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
