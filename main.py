"""
User registration / login service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.middleware import register_exception_handlers, register_middleware
from api.routes import router as api_router
from auth.routes import router as user_router
from auth.service import AuthService
from config.settings import Settings, config
from database.session import create_session_factory, create_tables

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> FastAPI:
    settings = settings or config
    if session_factory is None:
        session_factory = create_session_factory(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Creating tables…")
        await create_tables(session_factory.kw["bind"])
        logger.info("Application ready to accept requests.")
        yield
        await session_factory.kw["bind"].dispose()

    app = FastAPI(
        title="User Auth Service",
        version="1.0.0",
        description="User registration and login.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.auth_service = AuthService(
        token_secret=settings.token_secret,
        token_expiry_seconds=settings.token_expiry_seconds,
        bcrypt_rounds=settings.bcrypt_rounds,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["auth-token"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(api_router)
    app.include_router(user_router, prefix=f"{settings.api_prefix}/user")

    return app


configure_logging(config.debug)
app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
