"""
Credential store — create and look up user identities.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ConflictError, NotFoundError, StorageError
from database.models import User

logger = logging.getLogger(__name__)


async def create_user(
    session: AsyncSession,
    username: str,
    password_hash: Optional[str] = None,
    email: Optional[str] = None,
) -> User:
    """
    Insert a new user and return it with its assigned ``id``.

    Raises ``ConflictError`` when the username or email is already taken.
    """
    user = User(username=username, password_hash=password_hash, email=email)
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        logger.info("Rejected duplicate registration for username %s", username)
        raise ConflictError("Username or email already registered") from exc
    except SQLAlchemyError as exc:
        logger.exception("Failed to create user %s", username)
        raise StorageError() from exc
    return user


async def find_user_by_username(session: AsyncSession, username: str) -> User:
    """Return the user named *username* or raise ``NotFoundError``."""
    try:
        result = await session.execute(select(User).where(User.username == username))
    except SQLAlchemyError as exc:
        logger.exception("Failed to look up user %s", username)
        raise StorageError() from exc
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("User not found")
    return user


async def list_users(session: AsyncSession) -> List[User]:
    """All users in registration order."""
    try:
        result = await session.execute(select(User).order_by(User.id.asc()))
    except SQLAlchemyError as exc:
        logger.exception("Failed to list users")
        raise StorageError() from exc
    return list(result.scalars().all())
