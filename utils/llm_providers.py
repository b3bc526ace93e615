"""
Thin adapter layer over chat provider SDKs (Cohere, OpenAI).

Each provider exposes the same ``chat`` interface so callers never import
provider-specific code.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List

logger = logging.getLogger(__name__)

PREAMBLE = "You respond in concise sentences."

# Canned opening exchange sent ahead of every question.
GREETING_HISTORY: List[Dict[str, str]] = [
    {"role": "user", "message": "Hello"},
    {"role": "chatbot", "message": "Hi, how can I help you today?"},
]


class BaseChatProvider(ABC):
    """Common interface that every concrete provider implements."""

    @abstractmethod
    async def chat(self, question: str) -> str:
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Cohere
# ═══════════════════════════════════════════════════════════════════════════════


class CohereChatProvider(BaseChatProvider):
    def __init__(self, api_key: str, default_model: str = "command-a-03-2025"):
        self._api_key = api_key
        self._client = None
        self.default_model = default_model

    @property
    def client(self):
        # Built on first use so the app can start without a key.
        if self._client is None:
            import cohere

            self._client = cohere.AsyncClient(api_key=self._api_key)
        return self._client

    async def chat(self, question: str) -> str:
        response = await self.client.chat(
            model=self.default_model,
            preamble=PREAMBLE,
            chat_history=[
                {"role": turn["role"].upper(), "message": turn["message"]}
                for turn in GREETING_HISTORY
            ],
            message=question,
        )
        return response.text or ""


# ═══════════════════════════════════════════════════════════════════════════════
# OpenAI
# ═══════════════════════════════════════════════════════════════════════════════


class OpenAIChatProvider(BaseChatProvider):
    def __init__(self, api_key: str, default_model: str = "gpt-4o-mini"):
        self._api_key = api_key
        self._client = None
        self.default_model = default_model

    @property
    def client(self):
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def chat(self, question: str) -> str:
        roles = {"user": "user", "chatbot": "assistant"}
        messages = [{"role": "system", "content": PREAMBLE}]
        messages += [
            {"role": roles[turn["role"]], "content": turn["message"]}
            for turn in GREETING_HISTORY
        ]
        messages.append({"role": "user", "content": question})

        response = await self.client.chat.completions.create(
            model=self.default_model,
            messages=messages,
        )
        return response.choices[0].message.content or ""


# ═══════════════════════════════════════════════════════════════════════════════
# Factory
# ═══════════════════════════════════════════════════════════════════════════════


def get_chat_provider(
    provider_name: str,
    *,
    api_key: str,
    default_model: str | None = None,
) -> BaseChatProvider:
    """
    Build a chat provider.

    Parameters
    ----------
    provider_name : "cohere" | "openai"
    api_key       : key for that provider.
    default_model : override the provider's default model.
    """
    if provider_name == "cohere":
        return CohereChatProvider(
            api_key=api_key,
            default_model=default_model or "command-a-03-2025",
        )
    if provider_name == "openai":
        return OpenAIChatProvider(
            api_key=api_key,
            default_model=default_model or "gpt-4o-mini",
        )
    raise ValueError(f"Unsupported chat provider: {provider_name}")
