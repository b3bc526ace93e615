"""
JWT session token creation and verification.

Tokens are standard JWTs (HS256 by default) carrying ``userId``, ``email``
and optionally ``fullName`` plus ``iat`` / ``exp``.  The secret is handed
to ``TokenCodec`` by the caller (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

import jwt
import pydantic
from pydantic import BaseModel, ConfigDict, Field

from auth.errors import ConfigurationError, InvalidTokenError

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_SECONDS = 3600


class TokenClaims(BaseModel):
    """Identity claims decoded from a verified session token."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    email: str
    full_name: Optional[str] = Field(default=None, alias="fullName")
    iat: int
    exp: int

    def to_public(self) -> Dict[str, Any]:
        """Claims as they appear inside the token (camelCase keys)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class TokenCodec:
    """Issues and verifies signed, expiring session tokens."""

    def __init__(
        self,
        secret: Optional[str],
        *,
        algorithm: str = "HS256",
        expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._expiry_seconds = expiry_seconds
        self._clock = clock

    def _require_secret(self) -> str:
        if not self._secret:
            raise ConfigurationError("JWT_SECRET is not configured")
        return self._secret

    def issue(self, user_id: str, email: str, full_name: Optional[str] = None) -> str:
        """Create a signed token for the given identity."""
        secret = self._require_secret()
        now = int(self._clock())
        payload: Dict[str, Any] = {
            "userId": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + self._expiry_seconds,
        }
        if full_name is not None:
            payload["fullName"] = full_name
        return jwt.encode(payload, secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry and return the decoded claims.

        Raises ``InvalidTokenError`` for every kind of failure; expired and
        tampered tokens are not distinguished.
        """
        secret = self._require_secret()
        try:
            # Expiry is checked against our own clock below.
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "iat"],
                },
            )
            claims = TokenClaims.model_validate(payload)
        except (jwt.InvalidTokenError, pydantic.ValidationError) as exc:
            logger.debug("Token rejected: %s", exc)
            raise InvalidTokenError("invalid token") from exc

        if self._clock() >= claims.exp:
            logger.debug("Token rejected: expired at %s", claims.exp)
            raise InvalidTokenError("token expired")
        return claims
