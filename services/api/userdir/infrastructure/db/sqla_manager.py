from userdir.common.exceptions import format_exception_string
import userdir.infrastructure.exceptions as exc
import userdir.infrastructure.interfaces as mgrs
import userdir.infrastructure.models as models

import typing as t
import sqlmodel as sqlm

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


import asyncio
import contextlib
import logging

logger = logging.getLogger('userdir.storage')


class SQLAlchemySessionManager(mgrs.SessionManagerInterface[AsyncConnection, AsyncSession]):
    """DBSessionManager - credit to: Thomas's Aitken article at Medium.com
    Spawns Async sessions and connections to a database using SQLAlchemy and ensures they're closed/rolled back properly.

    Can be created empty and bound later with init(), so importing the app never needs a connection string.
    """

    def __init__(self, host: str | None = None, engine_kwargs: dict[str,t.Any] | None = None):
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None
        if host:
            self.init(host, engine_kwargs)

    def init(self, url: str, engine_kwargs: dict[str, t.Any] | None = None) -> None:
        self._engine = create_async_engine(url, **(engine_kwargs or {}))
        self._sessionmaker = async_sessionmaker(autocommit=False, bind=self._engine, expire_on_commit=False)
        logger.info(f'[DB Manager] Engine created for dialect "{self._engine.dialect.name}"') #never log the URL, it carries credentials

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise exc.StorageNotInitialzied("[DB Manager] DatabaseSessionManager is not initizalized!")
        return self._engine

    async def close(self) -> None:
        if self._engine is None:
            raise exc.StorageNotInitialzied("[DB Manager] DatabaseSessionManager is not initizalized!")
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    @contextlib.asynccontextmanager
    async def connect(self) -> t.AsyncIterator[AsyncConnection]:
        async with self.engine.begin() as connection:
            try:
                yield connection
            except Exception as e:
                await connection.rollback()
                raise e

    @contextlib.asynccontextmanager
    async def session(self, **kwargs) -> t.AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise exc.StorageNotInitialzied("[DB Manager] DatabaseSessionManager is not initizalized!")

        if kwargs:
            session = AsyncSession(**kwargs)
        else:
            session = self._sessionmaker()

        try:
            yield session
        except Exception as e:
            await session.rollback()
            raise e
        finally:
            await session.close()


    async def wait_for_startup(self, attempts:int = 5, interval_sec: int = 5):
        """Sends SELECT 1 to a DB and waits till response with retries"""

        retries = 0
        async with self.session() as session:
            while retries < attempts:
                try:
                    await session.execute(sqlm.text("SELECT 1"))
                    logger.info("[WAIT FOR DB] SELECT 1 Executed -> Database is up and running!")
                    return
                except Exception as e:
                    logger.debug(format_exception_string(e, "WAIT FOR DB", "SELECT 1 failed"))
                    retries += 1
                    logger.info(f"[WAIT FOR DB] Database is not ready yet, retrying ({retries}/{attempts})...")
                    await asyncio.sleep(interval_sec)
            logger.info(f"[WAIT FOR DB] Database is not available after all {attempts} retries.")
            raise exc.StorageBootError(f"Database failed to boot within {retries*interval_sec}sec!")

    async def initialize_data_structures(self):
        logger.info(f'[INIT DB] Creating tables if missing: {", ".join(models.TABLES)}')
        async with self.engine.begin() as conn:
            await conn.run_sync(sqlm.SQLModel.metadata.create_all)

    async def flush_data(self):
        logger.info('[DB] Flush_all called -> Dropping all tables.')
        async with self.engine.begin() as conn:
            await conn.run_sync(sqlm.SQLModel.metadata.drop_all)
