"""
REST API routes outside the auth flow.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from api.dependencies import get_chat_provider, get_session_guard, get_settings
from auth.errors import UpstreamError, ValidationError
from auth.guard import SessionGuard
from config.settings import Settings
from utils.llm_providers import BaseChatProvider

logger = logging.getLogger(__name__)

router = APIRouter()


class RecommendationRequest(BaseModel):
    question: Optional[str] = None


async def recommendation_gate(
    request: Request,
    guard: SessionGuard = Depends(get_session_guard),
    settings: Settings = Depends(get_settings),
) -> None:
    """Public by default; requires a session when RECOMMENDATION_REQUIRES_AUTH is set."""
    if settings.recommendation_requires_auth:
        request.state.user = guard.authenticate(request.cookies.get(settings.cookie_name))


@router.post("/recommendation", dependencies=[Depends(recommendation_gate)])
async def recommendation(
    req: RecommendationRequest,
    provider: BaseChatProvider = Depends(get_chat_provider),
) -> Dict[str, str]:
    """Forward a free-text question to the chat provider."""
    if not req.question or not req.question.strip():
        raise ValidationError("Question required")
    try:
        answer = await provider.chat(req.question)
    except Exception as exc:
        logger.exception("Chat provider error")
        raise UpstreamError("Failed to fetch AI response") from exc
    return {"recommendation": answer}


@router.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}
