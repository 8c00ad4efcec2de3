"""Database connection, session management and schema migrations"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from alembic import command
from alembic.config import Config as AlembicConfig
from alembic.runtime.migration import MigrationContext
from alembic.util import CommandError
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from buildtrack.config import Settings, settings as default_settings
from buildtrack.exceptions import BuildTrackError, PersistenceError

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()

MIGRATIONS_PATH = Path(__file__).resolve().parent / "migrations"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class ProjectStore:
    """
    Handle on the persistent store shared by the credential store and the
    project repository.

    The handle owns the async engine and session factory. It must be opened
    before use and closed when the caller is done with it:

        async with ProjectStore(settings) as store:
            repository = ProjectRepository(store)
            projects = await repository.list_all()

    Opening the store brings the schema up to the latest migration.
    """

    def __init__(self, config: Optional[Settings] = None, database_url: Optional[str] = None):
        self.settings = config or default_settings
        self.database_url = database_url or self.settings.database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise PersistenceError("Project store is not open")
        return self._engine

    async def open(self) -> "ProjectStore":
        """
        Create the engine and run pending schema migrations.

        Returns:
            The opened store

        Raises:
            PersistenceError: If the database cannot be reached or migrated
        """
        if self._engine is not None:
            return self

        engine = create_async_engine(
            self.database_url,
            echo=self.settings.database_echo,
            pool_pre_ping=True,
        )
        if self.database_url.startswith("sqlite"):
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        try:
            async with engine.connect() as conn:
                await conn.run_sync(self._upgrade_schema)
                await conn.commit()
        except (SQLAlchemyError, CommandError, OSError) as e:
            await engine.dispose()
            logger.error(f"Failed to open project store at {self._safe_url()}: {e}")
            raise PersistenceError(f"Failed to open project store: {e}") from e

        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(f"Project store opened at {self._safe_url()}")
        return self

    async def close(self) -> None:
        """Dispose of the engine. Safe to call more than once."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Project store closed")

    async def __aenter__(self) -> "ProjectStore":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a transactional session.

        Commits when the block exits normally and rolls back otherwise.
        Storage errors are re-raised as PersistenceError; buildtrack errors
        raised inside the block propagate unchanged.

        Usage:
            async with store.session() as session:
                result = await session.execute(select(ProjectRecord))
        """
        if self._session_factory is None:
            raise PersistenceError("Project store is not open")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except BuildTrackError:
                await session.rollback()
                raise
            except (SQLAlchemyError, OSError) as e:
                await session.rollback()
                logger.error(f"Database operation failed: {e}")
                raise PersistenceError(f"Database operation failed: {e}") from e
            except Exception:
                await session.rollback()
                raise

    async def schema_version(self) -> Optional[str]:
        """
        Current schema revision recorded in the database.

        Returns:
            Alembic revision id, or None for an unversioned database
        """
        try:
            async with self.engine.connect() as conn:
                return await conn.run_sync(
                    lambda sync_conn: MigrationContext.configure(sync_conn).get_current_revision()
                )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read schema version: {e}") from e

    def _alembic_config(self) -> AlembicConfig:
        config = AlembicConfig()
        config.set_main_option("script_location", str(MIGRATIONS_PATH))
        return config

    def _upgrade_schema(self, connection) -> None:
        config = self._alembic_config()
        config.attributes["connection"] = connection
        command.upgrade(config, "head")

    def _safe_url(self) -> str:
        # Strip credentials from server URLs before logging
        if "@" in self.database_url:
            scheme, _, rest = self.database_url.partition("://")
            return f"{scheme}://***@{rest.split('@', 1)[1]}"
        return self.database_url
