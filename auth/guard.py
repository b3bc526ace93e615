"""
Session guard: turns an incoming token into an authenticated identity.
"""

from __future__ import annotations

from typing import Optional

from auth.errors import InvalidTokenError, Unauthenticated
from auth.jwt import TokenClaims, TokenCodec


class SessionGuard:
    def __init__(self, token_codec: TokenCodec):
        self._tokens = token_codec

    def authenticate(self, token: Optional[str]) -> TokenClaims:
        """
        Return the verified claims, or raise ``Unauthenticated``.

        Identity is trusted from the signature alone; the user store is not
        consulted.
        """
        if not token:
            raise Unauthenticated("Not authenticated")
        try:
            return self._tokens.verify(token)
        except InvalidTokenError:
            raise Unauthenticated("Invalid or expired token")
