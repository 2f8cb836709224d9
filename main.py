"""
User registration and authentication service: application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from api.middleware import register_exception_handlers, register_middleware
from auth.repository import UserRepository
from auth.routes import router as users_router
from auth.service import AuthService
from auth.tokens import TokenIssuer
from config.settings import Settings, config
from database.session import build_engine, build_session_factory, create_tables

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    settings = settings or config
    engine = engine or build_engine(settings.database_url, echo=settings.debug)

    app = FastAPI(
        title="User Auth Service",
        version="1.0.0",
        description="User registration and login.",
    )

    # Collaborators are built once and shared by every request
    repository = UserRepository(build_session_factory(engine))
    token_issuer = TokenIssuer(settings.jwt_secret, settings.jwt_expiry_seconds)
    app.state.auth_service = AuthService(
        repository, token_issuer, bcrypt_rounds=settings.bcrypt_rounds
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app, uniform_status=settings.uniform_error_status)

    # Routes
    app.include_router(users_router, prefix="/users")

    @app.on_event("startup")
    async def on_startup():
        if settings.create_tables:
            await create_tables(engine)
        logger.info("Server running on %s", settings.port)

    @app.on_event("shutdown")
    async def on_shutdown():
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
