"""Review state routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel

from desk.application.usecase.dto import ReviewStateInfo
from desk.application.usecase.review_state import (
    CreateStateRequest,
    CreateStateUseCase,
    DeleteStateRequest,
    DeleteStateUseCase,
    ListStatesResponse,
    ListStatesUseCase,
    SetDefaultStateRequest,
    SetDefaultStateUseCase,
    UpdateStateRequest,
    UpdateStateUseCase,
)
from desk.domain.service import JWTService
from desk.interface.api.dependencies import require_user

router = APIRouter(prefix="/states", tags=["review states"], route_class=DishkaRoute)


class CreateStateAPIRequest(BaseModel):
    """API request for creating a review state."""

    name: str
    color: str


class UpdateStateAPIRequest(BaseModel):
    """API request for updating a review state."""

    name: Optional[str] = None
    color: Optional[str] = None
    display_order: Optional[int] = None


@router.get("", response_model=ListStatesResponse)
async def list_states(
    list_states_use_case: FromDishka[ListStatesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListStatesResponse:
    """List review states in display order."""
    require_user(jwt_service, auth_token)
    return await list_states_use_case.execute()


@router.post("", response_model=ReviewStateInfo, status_code=status.HTTP_201_CREATED)
async def create_state(
    request: CreateStateAPIRequest,
    create_state_use_case: FromDishka[CreateStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReviewStateInfo:
    """Create a review state at the end of the list. Admin only."""
    user = require_user(jwt_service, auth_token)
    return await create_state_use_case.execute(
        CreateStateRequest(
            user_id=user.user_id,
            email=user.email,
            name=request.name,
            color=request.color,
        )
    )


@router.patch("/{state_id}", response_model=ReviewStateInfo)
async def update_state(
    state_id: UUID,
    request: UpdateStateAPIRequest,
    update_state_use_case: FromDishka[UpdateStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReviewStateInfo:
    """Rename, recolor or reorder a review state. Admin only."""
    user = require_user(jwt_service, auth_token)
    return await update_state_use_case.execute(
        UpdateStateRequest(
            user_id=user.user_id,
            email=user.email,
            state_id=str(state_id),
            name=request.name,
            color=request.color,
            display_order=request.display_order,
        )
    )


@router.delete("/{state_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_state(
    state_id: UUID,
    delete_state_use_case: FromDishka[DeleteStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete a review state. Admin only.

    The default state and the workflow states cannot be deleted.
    """
    user = require_user(jwt_service, auth_token)
    await delete_state_use_case.execute(
        DeleteStateRequest(user_id=user.user_id, email=user.email, state_id=str(state_id))
    )


@router.post("/{state_id}/default", response_model=ReviewStateInfo)
async def set_default_state(
    state_id: UUID,
    set_default_state_use_case: FromDishka[SetDefaultStateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ReviewStateInfo:
    """Make a review state the default for new materials. Admin only."""
    user = require_user(jwt_service, auth_token)
    return await set_default_state_use_case.execute(
        SetDefaultStateRequest(
            user_id=user.user_id, email=user.email, state_id=str(state_id)
        )
    )
