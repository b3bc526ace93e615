"""
Tests for the SQLAlchemy user store (against a throwaway SQLite file).
"""

import asyncio

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import IntegrityError, OperationalError

from auth.errors import DuplicateKeyError, StoreError
from database.session import build_engine, build_session_factory, create_tables
from database.user_store import UserStore


@pytest_asyncio.fixture
async def store(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")
    await create_tables(engine)
    yield UserStore(build_session_factory(engine))
    await engine.dispose()


class TestUserStore:
    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, store):
        assert await store.find_by_email("nobody@x.com") is None

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, store):
        user = await store.create("Ann", "a@x.com", "hash")
        assert user.id
        assert user.full_name == "Ann"
        assert user.email == "a@x.com"

    @pytest.mark.asyncio
    async def test_find_after_create(self, store):
        created = await store.create("Ann", "a@x.com", "hash")
        found = await store.find_by_email("a@x.com")
        assert found == created

    @pytest.mark.asyncio
    async def test_email_lookup_is_case_sensitive(self, store):
        await store.create("Ann", "a@x.com", "hash")
        assert await store.find_by_email("A@X.COM") is None

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, store):
        await store.create("Ann", "a@x.com", "hash")
        with pytest.raises(DuplicateKeyError):
            await store.create("Another Ann", "a@x.com", "hash2")
        assert (await store.find_by_email("a@x.com")).full_name == "Ann"

    @pytest.mark.asyncio
    async def test_concurrent_creates_leave_one_record(self, store):
        results = await asyncio.gather(
            store.create("Ann", "a@x.com", "h1"),
            store.create("Ann Two", "a@x.com", "h2"),
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], DuplicateKeyError)
        assert await store.find_by_email("a@x.com") is not None


class TestStoreFailures:
    @pytest.mark.asyncio
    async def test_database_error_becomes_store_error(self):
        session_factory = MagicMock(
            side_effect=OperationalError("SELECT", {}, Exception("db down"))
        )
        store = UserStore(session_factory)
        with pytest.raises(StoreError):
            await store.find_by_email("a@x.com")

    @pytest.mark.asyncio
    async def test_commit_failure_becomes_store_error(self):
        store = UserStore(_factory_failing_commit(
            OperationalError("INSERT", {}, Exception("disk I/O error"))
        ))
        with pytest.raises(StoreError):
            await store.create("Ann", "a@x.com", "hash")

    @pytest.mark.asyncio
    async def test_non_email_constraint_is_not_a_duplicate(self):
        store = UserStore(_factory_failing_commit(
            IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: users.full_name"))
        ))
        with pytest.raises(StoreError):
            await store.create("Ann", "a@x.com", "hash")

    @pytest.mark.asyncio
    async def test_email_constraint_is_a_duplicate(self):
        store = UserStore(_factory_failing_commit(
            IntegrityError(
                "INSERT", {},
                Exception('duplicate key value violates unique constraint "ix_users_email"'),
            )
        ))
        with pytest.raises(DuplicateKeyError):
            await store.create("Ann", "a@x.com", "hash")


def _factory_failing_commit(error: Exception) -> MagicMock:
    """Session factory whose sessions fail on commit with ``error``."""
    session = MagicMock()
    session.commit = AsyncMock(side_effect=error)
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context)
