"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from desk.application.usecase.comment import (
    CountCommentsRequest,
    CountCommentsResponse,
    CountCommentsUseCase,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from desk.application.usecase.dto import CommentInfo
from desk.domain.service import JWTService
from desk.interface.api.dependencies import require_user

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    # Length is checked after trimming by the domain
    content: str = Field(min_length=1)


@router.get("/materials/{material_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    material_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetCommentsResponse:
    """Get a material's comments, newest first."""
    require_user(jwt_service, auth_token)
    return await get_comments_use_case.execute(
        GetCommentsRequest(material_id=str(material_id))
    )


@router.post(
    "/materials/{material_id}/comments",
    response_model=CommentInfo,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    material_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentInfo:
    """Comment on a material outside of a review.

    The comment records the material's current review state.

    Args:
        material_id: Material UUID
        request: Comment text
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment
    """
    user = require_user(jwt_service, auth_token)
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            user_id=user.user_id,
            email=user.email,
            material_id=str(material_id),
            content=request.content,
        )
    )


@router.get("/comments/counts", response_model=CountCommentsResponse)
async def count_comments(
    count_comments_use_case: FromDishka[CountCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    material_id: list[UUID] = Query(default=[]),
    auth_token: str | None = Cookie(default=None),
) -> CountCommentsResponse:
    """Comment counts for the given materials (repeat material_id)."""
    require_user(jwt_service, auth_token)
    return await count_comments_use_case.execute(
        CountCommentsRequest(material_ids=[str(m) for m in material_id])
    )


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete a comment. Admin only."""
    user = require_user(jwt_service, auth_token)
    await delete_comment_use_case.execute(
        DeleteCommentRequest(
            user_id=user.user_id, email=user.email, comment_id=str(comment_id)
        )
    )
