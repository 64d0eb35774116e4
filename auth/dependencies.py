"""
FastAPI dependencies for the user routes.

The session factory and ``AuthService`` are built once by ``create_app`` and
kept on ``app.state``; these dependencies hand them to route handlers.
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.service import AuthService
from auth.store import UserStore
from database.session import session_scope


async def db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    async with session_scope(request.app.state.session_factory) as session:
        yield session


async def user_store(session: AsyncSession = Depends(db_session)) -> UserStore:
    return UserStore(session)


def auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service
