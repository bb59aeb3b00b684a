#NOTE: Only lines not covered by broader tests are tested here.
import pytest
import userdir.infrastructure.db.sqla_manager as sqlamgr
import userdir.infrastructure.exceptions as iexc
import userdir.infrastructure.models as imod
from tests.integration.conftest import TEST_DATABASE_URL, TEST_ENGINE_KWARGS
import sqlalchemy as sa


@pytest.fixture(scope='function')
def mgr():
    return sqlamgr.SQLAlchemySessionManager(TEST_DATABASE_URL, TEST_ENGINE_KWARGS)

async def test_sqla_connect_and_close(mgr: sqlamgr.SQLAlchemySessionManager):
    async with mgr.connect() as conn:
        result = await conn.execute(sa.text("SELECT 1"))
        value = result.scalar_one()
        assert value == 1

    with pytest.raises(Exception):
        async with mgr.connect() as conn:
            raise Exception()
    await mgr.close()
    assert mgr.is_initialized is False


def test_sqla_created_empty():
    mgr = sqlamgr.SQLAlchemySessionManager()
    assert mgr.is_initialized is False
    with pytest.raises(iexc.StorageNotInitialzied):
        mgr.engine
    mgr.init(TEST_DATABASE_URL, TEST_ENGINE_KWARGS)
    assert mgr.is_initialized is True


#to avoid copypaste with pytest raises blocks...
@pytest.mark.parametrize(
    "call",
    [
        lambda mgr: mgr.close(),
        lambda mgr: mgr.connect(),
        lambda mgr: mgr.session(),
        lambda mgr: mgr.wait_for_startup(),
        lambda mgr: mgr.initialize_data_structures(),
        lambda mgr: mgr.flush_data(),
    ]
)
async def test_sqla_raises_when_closed(mgr: sqlamgr.SQLAlchemySessionManager, call):
    await mgr.close()
    with pytest.raises(iexc.StorageNotInitialzied):
        res = call(mgr)
        if hasattr(res, "__aenter__"):  #if async context manager
            async with res:
                pass
        else:
            await res


async def test_sqla_sessions(mgr: sqlamgr.SQLAlchemySessionManager):
    async with mgr.session(bind=mgr.engine, autoflush=True) as sess: #to trigger the creation of a new sessionmaker
        result = await sess.execute(sa.text("SELECT 1"))
        value = result.scalar_one()
        assert value == 1

    with pytest.raises(Exception):
        async with mgr.session():
            raise Exception()
    await mgr.close()


async def test_sqla_startup(mgr: sqlamgr.SQLAlchemySessionManager):
    await mgr.wait_for_startup(1, 0)
    await mgr.close()

    with pytest.raises(iexc.StorageBootError):
        #a directory that does not exist => sqlite can't open the file
        broken = sqlamgr.SQLAlchemySessionManager('sqlite+aiosqlite:////nonexistent-dir/for/sure/db.sqlite')
        await broken.wait_for_startup(2, 0)


async def test_sqla_creates_and_drops_tables(mgr: sqlamgr.SQLAlchemySessionManager):
    def table_names(sync_conn):
        return set(sa.inspect(sync_conn).get_table_names())

    await mgr.initialize_data_structures()
    async with mgr.connect() as conn:
        assert set(imod.TABLES) <= await conn.run_sync(table_names)

    await mgr.flush_data()
    async with mgr.connect() as conn:
        assert await conn.run_sync(table_names) == set()
    await mgr.close()
