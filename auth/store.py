"""
Credential store — user records keyed by unique email.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import ConflictError, StoreError
from database.models import User

logger = logging.getLogger(__name__)


class UserStore:
    """Lookup-by-email and insert over a single request-scoped session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        try:
            result = await self._session.execute(
                select(User).where(User.email == email)
            )
        except SQLAlchemyError as exc:
            logger.exception("User lookup failed")
            raise StoreError("look up", str(exc)) from exc
        return result.scalar_one_or_none()

    async def insert(self, name: str, email: str, password_hash: str) -> User:
        """
        Persist a new user and return it with ``user_id`` assigned.

        The unique index on ``email`` is the source of truth for duplicates;
        a violation is rolled back and reported as ``ConflictError``.
        """
        user = User(
            user_id=uuid.uuid4(),
            name=name,
            email=email,
            password=password_hash,
        )
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            raise ConflictError(email) from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception("User insert failed")
            raise StoreError("save", str(exc)) from exc
        return user

    async def commit(self) -> None:
        """Make pending inserts durable."""
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise ConflictError() from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.exception("Commit failed")
            raise StoreError("save", str(exc)) from exc
