"""User profile router."""

import logging

from fastapi import APIRouter

from gymapp.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from gymapp.presentation.api.dependencies import CurrentUser, DBSession
from gymapp.presentation.api.schemas.auth import UserResponse
from gymapp.presentation.api.schemas.users import UpdateProfileRequest
from gymapp_auth import AuthError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/me",
    summary="Get current user",
    responses={
        200: {"description": "Current user data"},
        401: {"description": "Not authenticated"},
    },
)
async def get_me(user: CurrentUser) -> UserResponse:
    """
    Get the current authenticated user's information.

    Requires a valid access token in the Authorization header.
    """
    return UserResponse.model_validate(user)


@router.patch(
    "/me",
    summary="Update current user's profile",
    responses={
        200: {"description": "Profile updated"},
        401: {"description": "Not authenticated"},
    },
)
async def update_me(
    request: UpdateProfileRequest,
    user: CurrentUser,
    session: DBSession,
) -> UserResponse:
    """Update height, weight and goal. Omitted fields are left unchanged."""
    user.update_profile(
        height=request.height,
        weight=request.weight,
        goal=request.goal,
    )
    try:
        saved = await UserRepositorySQLAlchemy(session).save(user)
        await session.commit()
    except AuthError:
        await session.rollback()
        raise

    logger.info("Profile updated for user: %s", saved.id)
    return UserResponse.model_validate(saved)
