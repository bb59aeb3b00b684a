import pytest, typing as t, httpx, contextlib
import pytest_asyncio as pytestaio
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession
import userdir.infrastructure.dependencies as ideps
import userdir.main as main

import logging
logger = logging.getLogger('userdir')

# Use in-memory SQLite for tests, one fresh database per test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_ENGINE_KWARGS = dict(connect_args={"check_same_thread": False}, poolclass=StaticPool)


def _enable_foreign_keys(dbapi_connection, connection_record):
    #SQLite ignores REFERENCES clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytestaio.fixture(scope='function')
async def database_manager() -> t.AsyncGenerator[ideps.DatabaseManagerType, None]:
    mgr = ideps.DatabaseManagerType(TEST_DATABASE_URL, TEST_ENGINE_KWARGS)
    event.listen(mgr.engine.sync_engine, "connect", _enable_foreign_keys)
    await mgr.initialize_data_structures()
    yield mgr
    if mgr.is_initialized:
        await mgr.flush_data()
        await mgr.close()

@pytestaio.fixture(scope="function")
async def db_session(database_manager: ideps.DatabaseManagerType) -> t.AsyncGenerator[AsyncSession, None]:
    async with database_manager.session() as session:
        yield session

@pytestaio.fixture(scope="function")
async def uow(db_session: AsyncSession) -> t.AsyncIterator[ideps.UnitOfWork]:
    yield ideps.UnitOfWork(db_session)

@pytestaio.fixture(scope="function")
async def sql_user_repo(uow: ideps.UnitOfWork) -> ideps.UserRepository:
    repo = ideps.UserRepository(uow.session, uow)
    await repo.ensure_user_types_exist()
    await uow.commit()
    return repo


@contextlib.asynccontextmanager
async def serve_app(database_manager, hasher, token_codec) -> t.AsyncIterator[httpx.AsyncClient]:
    """API client over the real SQL repository, one session per request like in production"""

    async def override_get_db_session():
        async with database_manager.session() as session:
            yield session

    async with database_manager.session() as session:
        uow = ideps.UnitOfWork(session)
        await ideps.UserRepository(session, uow).ensure_user_types_exist()
        await uow.commit()

    main.app.dependency_overrides[ideps.get_db_session] = override_get_db_session
    main.app.dependency_overrides[ideps.get_password_hasher] = lambda: hasher
    main.app.dependency_overrides[ideps.get_token_codec] = lambda: token_codec

    transport = httpx.ASGITransport(app=main.app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://app:8080") as client:
            yield client
    finally:
        main.app.dependency_overrides.clear()


@pytestaio.fixture(scope='function')
async def sql_async_client(database_manager, hasher, token_codec) -> t.AsyncIterator[httpx.AsyncClient]:
    async with serve_app(database_manager, hasher, token_codec) as client:
        yield client


@pytestaio.fixture(scope='function')
async def file_database_manager(tmp_path) -> t.AsyncGenerator[ideps.DatabaseManagerType, None]:
    """SQLite file with a real connection pool, so concurrent requests get separate connections"""
    mgr = ideps.DatabaseManagerType(f"sqlite+aiosqlite:///{tmp_path / 'userdir.db'}")
    event.listen(mgr.engine.sync_engine, "connect", _enable_foreign_keys)
    await mgr.initialize_data_structures()
    yield mgr
    if mgr.is_initialized:
        await mgr.close()

@pytestaio.fixture(scope='function')
async def file_sql_async_client(file_database_manager, hasher, token_codec) -> t.AsyncIterator[httpx.AsyncClient]:
    async with serve_app(file_database_manager, hasher, token_codec) as client:
        yield client
