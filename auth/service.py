"""
Registration and login orchestration.

``AuthService`` validates input, checks and enforces email uniqueness,
hashes passwords and mints session tokens.  It knows nothing about HTTP;
routes translate its results into responses and cookies.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from auth.errors import AuthError, ConflictError, DuplicateKeyError, ValidationError
from auth.jwt import TokenCodec
from auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from database.user_store import UserRecord, UserStore

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
LOGOUT_MESSAGE = "Logged out successfully"


@dataclass(frozen=True)
class PublicUser:
    """The only user fields ever echoed back to clients."""

    id: str
    email: str

    def to_dict(self) -> dict:
        return {"id": self.id, "email": self.email}


@dataclass(frozen=True)
class AuthResult:
    user: PublicUser
    token: str


class AuthService:
    def __init__(
        self,
        user_store: UserStore,
        token_codec: TokenCodec,
        *,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ):
        self._users = user_store
        self._tokens = token_codec
        self._bcrypt_rounds = bcrypt_rounds

    async def register(
        self,
        full_name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """Create an account and return it with a fresh session token."""
        if not full_name or not email or not password:
            raise ValidationError("Full name, email and password required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        if await self._users.find_by_email(email) is not None:
            raise ConflictError("User already exists")

        password_hash = await asyncio.to_thread(
            hash_password, password, self._bcrypt_rounds
        )
        try:
            user = await self._users.create(full_name, email, password_hash)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration.
            raise ConflictError("User already exists")

        token = self._issue(user)
        logger.info("Registered user %s", user.id)
        return AuthResult(user=PublicUser(id=user.id, email=user.email), token=token)

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """Check credentials and return the user with a fresh session token."""
        if not email or not password:
            raise ValidationError("Email and password required")

        user = await self._users.find_by_email(email)
        if user is None:
            logger.info("Login failed: unknown email")
            raise AuthError("Invalid email or password")

        matches = await asyncio.to_thread(verify_password, password, user.password_hash)
        if not matches:
            logger.info("Login failed: bad password for user %s", user.id)
            raise AuthError("Invalid email or password")

        token = self._issue(user)
        logger.info("Login: %s", user.id)
        return AuthResult(user=PublicUser(id=user.id, email=user.email), token=token)

    def logout(self) -> str:
        """Nothing to do server-side; the caller clears the cookie."""
        return LOGOUT_MESSAGE

    def _issue(self, user: UserRecord) -> str:
        return self._tokens.issue(user.id, user.email, user.full_name)
