"""
Shared fixtures: an in-memory SQLite database, the auth service and an app
wired against them.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from auth.service import AuthService
from config.settings import load_settings
from database.session import build_engine, build_session_factory, init_schema
from main import create_app

TEST_SECRET = "test-secret"


def make_settings(**overrides):
    values = dict(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
    )
    values.update(overrides)
    return load_settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def token_issuer():
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def auth_service(token_issuer):
    return AuthService(hasher=PasswordHasher(rounds=4), issuer=token_issuer)


@pytest_asyncio.fixture
async def session(settings):
    engine = build_engine(settings)
    await init_schema(engine)
    factory = build_session_factory(engine)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def anonymous_client():
    with TestClient(create_app(make_settings(auth_profile="anonymous"))) as client:
        yield client
