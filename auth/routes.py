"""
Auth API routes — register, login, logout, me.

Route prefix: /api
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field

from api.dependencies import get_auth_service, get_settings
from auth.cookies import clear_auth_cookie, set_auth_cookie
from auth.dependencies import get_current_user
from auth.jwt import TokenClaims
from auth.service import AuthService
from config.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request schemas ────────────────────────────────────────────────────
# Fields are optional so that presence checks produce the service's own
# error messages instead of a framework validation error.


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Register a new user and log them in."""
    result = await service.register(req.full_name, req.email, req.password)
    set_auth_cookie(response, result.token, settings)
    return {"user": result.user.to_dict()}


@router.post("/login")
async def login(
    req: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Login with email + password."""
    result = await service.login(req.email, req.password)
    set_auth_cookie(response, result.token, settings)
    return {"user": result.user.to_dict()}


@router.post("/logout")
async def logout(
    response: Response,
    service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> Dict[str, str]:
    """Clear the session cookie."""
    message = service.logout()
    clear_auth_cookie(response, settings)
    return {"message": message}


@router.get("/me")
async def me(claims: TokenClaims = Depends(get_current_user)) -> Dict[str, Any]:
    """Return the claims of the logged-in user."""
    return {"user": claims.to_public()}
