"""
Shared fixtures: a throw-away SQLite database per test and a fast bcrypt cost.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.pool import NullPool

from auth.service import AuthService
from auth.store import UserStore
from config.settings import Settings
from database.session import create_session_factory, create_tables


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'users.db'}",
        token_secret="tests-secret-key",
        bcrypt_rounds=4,
    )


@pytest.fixture
def session_factory(settings):
    return create_session_factory(settings.database_url, poolclass=NullPool)


@pytest_asyncio.fixture
async def session(session_factory):
    await create_tables(session_factory.kw["bind"])
    async with session_factory() as session:
        yield session
    await session_factory.kw["bind"].dispose()


@pytest.fixture
def store(session) -> UserStore:
    return UserStore(session)


@pytest.fixture
def service(settings) -> AuthService:
    return AuthService(token_secret=settings.token_secret, bcrypt_rounds=settings.bcrypt_rounds)


@pytest.fixture
def client(settings, session_factory):
    from main import create_app

    app = create_app(settings=settings, session_factory=session_factory)
    with TestClient(app) as test_client:
        yield test_client
