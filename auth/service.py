"""
Register / login flows.

``AuthService`` holds the process-wide settings it needs (token secret,
expiry, bcrypt cost) and is handed a request-scoped ``UserStore`` per call.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi.concurrency import run_in_threadpool

from auth.errors import AuthError, ConflictError, NotFoundError
from auth.jwt import create_token
from auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from auth.store import UserStore
from auth.validation import login_validation, register_validation

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        token_secret: str,
        token_expiry_seconds: int = 0,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ):
        if not token_secret:
            raise ValueError("token_secret must not be empty")
        self._token_secret = token_secret
        self._token_expiry_seconds = token_expiry_seconds
        self._bcrypt_rounds = bcrypt_rounds

    async def register(self, store: UserStore, data: Any) -> str:
        """
        Create a user from ``{name, email, password}`` and return its id.

        Raises ``ValidationError``, ``ConflictError`` or ``StoreError``.
        """
        req = register_validation(data)

        if await store.get_by_email(req.email) is not None:
            logger.info("Registration rejected: %s already exists", req.email)
            raise ConflictError(req.email)

        password_hash = await run_in_threadpool(hash_password, req.password, self._bcrypt_rounds)
        user = await store.insert(
            name=req.name,
            email=req.email,
            password_hash=password_hash,
        )
        await store.commit()

        logger.info("Registered user %s", user.user_id)
        return str(user.user_id)

    async def login(self, store: UserStore, data: Any) -> str:
        """
        Check ``{email, password}`` and return a signed token for the user.

        Raises ``ValidationError``, ``NotFoundError``, ``AuthError`` or
        ``StoreError``.
        """
        req = login_validation(data)

        user = await store.get_by_email(req.email)
        if user is None:
            raise NotFoundError(req.email)

        if not await run_in_threadpool(verify_password, req.password, user.password):
            logger.warning("Failed login for user %s", user.user_id)
            raise AuthError()

        token = create_token(
            str(user.user_id),
            self._token_secret,
            expiry_seconds=self._token_expiry_seconds,
        )
        logger.info("Login: %s", user.user_id)
        return token
