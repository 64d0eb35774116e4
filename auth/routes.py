"""
User API routes — register, login.

Route prefix: {api_prefix}/user
"""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from auth.dependencies import auth_service, user_store
from auth.service import AuthService
from auth.store import UserStore
from auth.validation import LoginRequest, RegisterRequest

TOKEN_HEADER = "auth-token"

router = APIRouter(tags=["user"])


@router.post("/register")
async def register(
    req: RegisterRequest,
    store: UserStore = Depends(user_store),
    service: AuthService = Depends(auth_service),
) -> Dict[str, str]:
    """Register a new user."""
    user_id = await service.register(store, req)
    return {"userId": user_id}


@router.post("/login", response_class=PlainTextResponse)
async def login(
    req: LoginRequest,
    store: UserStore = Depends(user_store),
    service: AuthService = Depends(auth_service),
) -> PlainTextResponse:
    """Login with email + password; the token is returned as body and header."""
    token = await service.login(store, req)
    return PlainTextResponse(token, headers={TOKEN_HEADER: token})
