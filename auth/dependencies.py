"""
FastAPI dependencies for authentication and task ownership.

``authorize_owner`` is the gate every task route goes through: in the
``credentials`` profile the effective owner is the verified token subject,
and a path ``user_id`` naming anybody else is answered with 404.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.service import AuthService
from config.settings import Settings
from core.errors import InvalidToken, NotFoundError

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> int:
    """
    Extract and verify the Bearer token, returning the authenticated
    user id.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidToken("Missing Bearer token")
    claims = auth.issuer.verify(credentials.credentials)
    try:
        return int(claims.sub)
    except ValueError as exc:
        raise InvalidToken("Token subject is not a user id") from exc


async def authorize_owner(
    user_id: int = Path(..., ge=1),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    settings: Settings = Depends(get_settings),
    auth: AuthService = Depends(get_auth_service),
) -> int:
    """Resolve the owner id a task operation is allowed to act as."""
    if not settings.requires_credentials:
        # Anonymous profile: there are no credentials, the path is trusted.
        return user_id

    current_user_id = await get_current_user_id(credentials, auth)
    if current_user_id != user_id:
        logger.warning(
            "User %s attempted to access tasks of user %s", current_user_id, user_id
        )
        raise NotFoundError("Task not found")
    return current_user_id
