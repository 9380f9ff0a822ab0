"""Authentication routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from desk.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from desk.domain.service import JWTService
from desk.interface.api.dependencies import require_user

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetCurrentUserResponse:
    """Get the signed-in user with their role.

    Sign-in itself happens at the identity provider, which sets the
    auth_token cookie.

    Args:
        get_current_user_use_case: Get current user use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Current user information
    """
    user = require_user(jwt_service, auth_token)
    return await get_current_user_use_case.execute(
        GetCurrentUserRequest(user_id=user.user_id, email=user.email)
    )
