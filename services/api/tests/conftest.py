import pytest, typing as t, httpx
import pytest_asyncio as pytestaio
import userdir.infrastructure.dependencies as ideps
import userdir.infrastructure.security as security
import userdir.main as main
from tests.mocks import FakeHasher, AsyncHasherAdapter, InMemoryUserRepository

import logging
logger = logging.getLogger('userdir')

#At least 32 bytes, PyJWT warns about shorter HMAC keys
TEST_JWT_SECRET = 'test-signing-secret-0123456789abcdef'


@pytest.fixture
def hasher() -> AsyncHasherAdapter:
    return AsyncHasherAdapter(FakeHasher())

@pytest.fixture
def token_codec() -> security.JWTTokenCodec:
    return security.JWTTokenCodec(TEST_JWT_SECRET, "HS256")

@pytestaio.fixture(scope='function')
async def user_repo() -> InMemoryUserRepository:
    repo = InMemoryUserRepository()
    await repo.ensure_user_types_exist()
    return repo


@pytestaio.fixture(scope='function')
async def async_client(user_repo: InMemoryUserRepository, hasher, token_codec) -> t.AsyncIterator[httpx.AsyncClient]:
    """API client over the in-memory store. The lifespan does not run under ASGITransport."""

    async def override_get_user_repo():
        return user_repo

    main.app.dependency_overrides[ideps.get_user_repo] = override_get_user_repo
    main.app.dependency_overrides[ideps.get_password_hasher] = lambda: hasher
    main.app.dependency_overrides[ideps.get_token_codec] = lambda: token_codec

    transport = httpx.ASGITransport(app=main.app)
    async with httpx.AsyncClient(transport=transport, base_url="http://app:8080") as client:
        yield client

    main.app.dependency_overrides.clear()
