"""
Auth API routes — register, list users, sign in.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas import SignInInput, UserInput, UserOut, UserResponse
from auth.dependencies import get_auth_service, get_settings
from auth.service import AuthService
from config.settings import Settings
from core.errors import InvalidCredentials, ValidationError
from database.session import get_db_session
from database.users import create_user as store_user
from database.users import list_users

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


async def _register(
    req: UserInput,
    session: AsyncSession,
    settings: Settings,
    auth: AuthService,
) -> UserResponse:
    logger.info("Received request to create user with username %s", req.username)

    if not settings.requires_credentials:
        user = await store_user(session, username=req.username)
        logger.info("Successfully created user with id %s", user.id)
        return UserResponse(user=UserOut.model_validate(user), token=None)

    missing = tuple(
        name for name in ("password", "email") if getattr(req, name) is None
    )
    if missing:
        raise ValidationError("Field required", fields=missing)

    user, token = await auth.register(
        session, req.username, req.password, str(req.email)
    )
    logger.info("Successfully created user with id %s", user.id)
    return UserResponse(user=UserOut.model_validate(user), token=token)


@router.post("/users", response_model=UserResponse)
async def create_user(
    req: UserInput,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
    auth: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Register a new user."""
    return await _register(req, session, settings, auth)


@router.post("/create_user", response_model=UserResponse, include_in_schema=False)
async def create_user_legacy(
    req: UserInput,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
    auth: AuthService = Depends(get_auth_service),
) -> UserResponse:
    return await _register(req, session, settings, auth)


@router.get("/get_users", response_model=List[UserOut])
async def get_users(session: AsyncSession = Depends(get_db_session)) -> List[UserOut]:
    logger.info("Received request to get all users")
    users = await list_users(session)
    logger.info("Successfully fetched %d users", len(users))
    return [UserOut.model_validate(u) for u in users]


@router.post("/sign_in", response_model=UserResponse)
async def sign_in(
    req: SignInInput,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
    auth: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Sign in with username + password."""
    if not settings.requires_credentials:
        raise InvalidCredentials()
    user, token = await auth.authenticate(session, req.username, req.password)
    return UserResponse(user=UserOut.model_validate(user), token=token)
