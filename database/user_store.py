"""
User store adapter — the only code that talks to the database.

``find_by_email`` is a point lookup; ``create`` inserts and relies on the
unique index on ``users.email`` to reject duplicates atomically.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auth.errors import DuplicateKeyError, StoreError
from database.models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserRecord:
    id: str
    full_name: str
    email: str
    password_hash: str


def _to_record(user: User) -> UserRecord:
    return UserRecord(
        id=str(user.user_id),
        full_name=user.full_name,
        email=user.email,
        password_hash=user.password_hash,
    )


def _is_duplicate_email(exc: IntegrityError) -> bool:
    # Only the unique email index may surface as a duplicate; other constraint
    # failures are store errors.  Postgres names the index, SQLite the column.
    return "email" in str(exc.orig).lower()


class UserStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(User).where(User.email == email)
                )
                user = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("User lookup failed")
            raise StoreError() from exc
        return _to_record(user) if user is not None else None

    async def create(self, full_name: str, email: str, password_hash: str) -> UserRecord:
        """Insert a user; raises ``DuplicateKeyError`` if the email is taken."""
        user = User(
            user_id=uuid.uuid4(),
            full_name=full_name,
            email=email,
            password_hash=password_hash,
        )
        try:
            async with self._session_factory() as session:
                session.add(user)
                await session.commit()
        except IntegrityError as exc:
            if not _is_duplicate_email(exc):
                logger.exception("User insert violated a constraint")
                raise StoreError() from exc
            raise DuplicateKeyError(email) from exc
        except SQLAlchemyError as exc:
            logger.exception("User insert failed")
            raise StoreError() from exc
        return _to_record(user)
