"""
Shared pytest fixtures.
"""

import os

# Must be set before ``config.settings`` is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import Dict, Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from auth.errors import ConflictError  # noqa: E402
from auth.repository import EMAIL_TAKEN, UserRepository  # noqa: E402
from auth.service import AuthService  # noqa: E402
from auth.tokens import TokenIssuer  # noqa: E402
from config.settings import Settings  # noqa: E402
from database.models import User  # noqa: E402
from database.session import build_engine, build_session_factory, create_tables  # noqa: E402
from main import create_app  # noqa: E402

TEST_SECRET = "test-secret"


class InMemoryUserRepository:
    """Stand-in for ``UserRepository`` keeping users in a dict by email."""

    def __init__(self) -> None:
        self.users: Dict[str, User] = {}

    async def find_by_email(self, email: str) -> Optional[User]:
        return self.users.get(email)

    async def save(self, user: User) -> User:
        if user.email in self.users:
            raise ConflictError(EMAIL_TAKEN)
        self.users[user.email] = user
        return user


@pytest.fixture
def token_issuer():
    return TokenIssuer(TEST_SECRET, expiry_seconds=3600)


@pytest.fixture
def memory_repo():
    return InMemoryUserRepository()


@pytest.fixture
def service(memory_repo, token_issuer):
    return AuthService(memory_repo, token_issuer, bcrypt_rounds=4)


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'users.db'}"


@pytest_asyncio.fixture
async def sqlite_repo(sqlite_url):
    engine = build_engine(sqlite_url)
    await create_tables(engine)
    yield UserRepository(build_session_factory(engine))
    await engine.dispose()


def _settings(database_url: str, **overrides) -> Settings:
    return Settings(
        database_url=database_url,
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        **overrides,
    )


@pytest.fixture
def make_client(sqlite_url):
    """Factory yielding a started ``TestClient``; pass settings overrides."""
    clients = []

    def _make(database_url: Optional[str] = None, **overrides) -> TestClient:
        app = create_app(_settings(database_url or sqlite_url, **overrides))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
