"""
FastAPI dependencies for authentication.

Provides ``get_current_user`` which reads the auth cookie, verifies it
and attaches the claims to ``request.state.user``.
"""

from __future__ import annotations

from fastapi import Depends, Request

from api.dependencies import get_session_guard, get_settings
from auth.guard import SessionGuard
from auth.jwt import TokenClaims
from config.settings import Settings


async def get_current_user(
    request: Request,
    guard: SessionGuard = Depends(get_session_guard),
    settings: Settings = Depends(get_settings),
) -> TokenClaims:
    """
    Extract and verify the session cookie, returning the authenticated
    claims.  Raises ``Unauthenticated`` (401) when absent or invalid.
    """
    claims = guard.authenticate(request.cookies.get(settings.cookie_name))
    request.state.user = claims
    return claims
