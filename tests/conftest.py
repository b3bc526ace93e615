"""
Shared fixtures: settings, an in-memory user store and an HTTP client.
"""

import uuid
from typing import Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from auth.errors import DuplicateKeyError, StoreError
from config.settings import Settings
from database.user_store import UserRecord
from utils.llm_providers import BaseChatProvider

TEST_SECRET = "test-secret-key-that-is-at-least-32-bytes-long"


class InMemoryUserStore:
    """Drop-in for ``UserStore`` keyed by email, with the same uniqueness rule."""

    def __init__(self):
        self.users: Dict[str, UserRecord] = {}

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        return self.users.get(email)

    async def create(self, full_name: str, email: str, password_hash: str) -> UserRecord:
        if email in self.users:
            raise DuplicateKeyError(email)
        record = UserRecord(
            id=str(uuid.uuid4()),
            full_name=full_name,
            email=email,
            password_hash=password_hash,
        )
        self.users[email] = record
        return record


class FailingUserStore:
    """User store whose backing database is unreachable."""

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        raise StoreError()

    async def create(self, full_name: str, email: str, password_hash: str) -> UserRecord:
        raise StoreError()


def make_settings(**overrides) -> Settings:
    values = dict(
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        database_url="sqlite+aiosqlite:///:memory:",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def chat_provider() -> MagicMock:
    provider = MagicMock(spec=BaseChatProvider)
    provider.chat = AsyncMock(return_value="Take the early lift.")
    return provider


@pytest.fixture
def make_client(user_store, chat_provider):
    """Factory so tests can build a client with their own settings."""

    def _make(settings: Settings, user_store=user_store, **kwargs) -> TestClient:
        from main import create_app

        app = create_app(settings, user_store=user_store, chat_provider=chat_provider)
        return TestClient(app, **kwargs)

    return _make


@pytest.fixture
def client(make_client, settings) -> TestClient:
    return make_client(settings)


@pytest.fixture
def failing_user_store() -> FailingUserStore:
    return FailingUserStore()
