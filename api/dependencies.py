"""
FastAPI dependencies (shared across routes).

Everything is built once in ``main.create_app`` and parked on
``app.state``; these helpers hand the pieces to route handlers.
"""

from __future__ import annotations

from fastapi import Request

from auth.guard import SessionGuard
from auth.service import AuthService
from config.settings import Settings
from utils.llm_providers import BaseChatProvider


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_session_guard(request: Request) -> SessionGuard:
    return request.app.state.session_guard


def get_chat_provider(request: Request) -> BaseChatProvider:
    return request.app.state.chat_provider
