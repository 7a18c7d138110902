"""
Authentication flow — registration and sign-in.

Sign-in is lookup → bcrypt verify → token.  Every failure collapses into the
same ``InvalidCredentials`` so a caller cannot tell an unknown username from
a wrong password.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenIssuer
from auth.password import PasswordHasher
from core.errors import InvalidCredentials, NotFoundError
from database.models import User
from database.users import create_user, find_user_by_username

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, hasher: PasswordHasher, issuer: TokenIssuer) -> None:
        self.hasher = hasher
        self.issuer = issuer

    def issue_token(self, user: User) -> str:
        return self.issuer.issue(str(user.id))

    async def register(
        self,
        session: AsyncSession,
        username: str,
        password: str,
        email: Optional[str] = None,
    ) -> Tuple[User, str]:
        """Hash the password, store the user and hand back a fresh token."""
        user = await create_user(
            session,
            username=username,
            password_hash=self.hasher.hash(password),
            email=email,
        )
        logger.info("Registered user %s (%s)", user.username, user.id)
        return user, self.issue_token(user)

    async def authenticate(
        self,
        session: AsyncSession,
        username: str,
        password: str,
    ) -> Tuple[User, str]:
        """Return ``(user, token)`` or raise ``InvalidCredentials``."""
        try:
            user = await find_user_by_username(session, username)
        except NotFoundError:
            logger.info("Sign-in rejected for username %s", username)
            raise InvalidCredentials()

        if not user.password_hash:
            logger.info("Sign-in rejected for user %s: no password set", user.id)
            raise InvalidCredentials()

        try:
            ok = self.hasher.verify(password, user.password_hash)
        except ValueError:
            logger.warning("User %s has a malformed password digest", user.id)
            raise InvalidCredentials()

        if not ok:
            logger.info("Sign-in rejected for username %s", username)
            raise InvalidCredentials()

        logger.info("Login: %s (%s)", user.username, user.id)
        return user, self.issue_token(user)
