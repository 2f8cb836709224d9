"""
Persistence gateway for ``User`` rows.

Every call opens its own session from the factory, so one repository
instance is shared by all requests.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auth.errors import ConflictError, StoreError
from database.models import User

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email já cadastrado"
STORE_FAILURE = "Erro ao acessar o banco de dados"


class UserRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_email(self, email: str) -> Optional[User]:
        """Return the user registered with ``email``, or ``None``."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(User).where(User.email == email)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("User lookup failed")
            raise StoreError(STORE_FAILURE) from exc

    async def save(self, user: User) -> User:
        """
        Insert ``user`` in its own transaction.

        A constraint failure is a ``ConflictError`` only when a row with the
        same ``email`` now exists (a concurrent registration won the race);
        any other failure is a ``StoreError``.
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(user)
        except IntegrityError as exc:
            if await self.find_by_email(user.email) is not None:
                logger.warning("Insert rejected, email already stored: %s", user.email)
                raise ConflictError(EMAIL_TAKEN) from exc
            logger.exception("User insert violated a constraint")
            raise StoreError(STORE_FAILURE) from exc
        except SQLAlchemyError as exc:
            logger.exception("User insert failed")
            raise StoreError(STORE_FAILURE) from exc
        return user
