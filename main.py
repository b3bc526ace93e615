"""
Auth + recommendation backend — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from api.routes import router as api_router
from auth.guard import SessionGuard
from auth.jwt import TokenCodec
from auth.routes import router as auth_router
from auth.service import AuthService
from config.settings import Settings, config
from database.session import build_engine, build_session_factory, create_tables
from database.user_store import UserStore
from utils.llm_providers import BaseChatProvider, get_chat_provider

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("httpcore", "httpx", "openai", "cohere", "urllib3", "sqlalchemy.engine"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    user_store: Optional[UserStore] = None,
    chat_provider: Optional[BaseChatProvider] = None,
) -> FastAPI:
    """
    Build the application.  ``user_store`` and ``chat_provider`` may be
    injected (tests); otherwise they are built from ``settings``.
    """
    settings = settings or config

    app = FastAPI(
        title="Recommend Auth",
        version="1.0.0",
        description="Cookie-session auth with a proxied AI recommendation endpoint.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    engine = None
    if user_store is None:
        engine = build_engine(settings.database_url)
        user_store = UserStore(build_session_factory(engine))

    if chat_provider is None:
        chat_provider = get_chat_provider(
            settings.chat_provider,
            api_key=settings.chat_api_key(),
            default_model=settings.chat_model or None,
        )

    token_codec = TokenCodec(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiry_seconds=settings.jwt_expiry_seconds,
    )

    app.state.settings = settings
    app.state.auth_service = AuthService(
        user_store, token_codec, bcrypt_rounds=settings.bcrypt_rounds,
    )
    app.state.session_guard = SessionGuard(token_codec)
    app.state.chat_provider = chat_provider

    # Routes
    app.include_router(auth_router, prefix="/api")
    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def on_startup():
        if not settings.jwt_secret:
            logger.warning("JWT_SECRET is not set; register and login will fail")
        if engine is not None:
            await create_tables(engine)
        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        if engine is not None:
            await engine.dispose()

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
