"""Tag routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel

from desk.application.usecase.dto import TagGroupInfo, TagInfo
from desk.application.usecase.tag import (
    CreateTagGroupRequest,
    CreateTagGroupUseCase,
    CreateTagRequest,
    CreateTagUseCase,
    DeleteTagGroupRequest,
    DeleteTagGroupUseCase,
    DeleteTagRequest,
    DeleteTagUseCase,
    ListTagGroupsResponse,
    ListTagGroupsUseCase,
    UpdateTagGroupRequest,
    UpdateTagGroupUseCase,
    UpdateTagRequest,
    UpdateTagUseCase,
)
from desk.domain.service import JWTService
from desk.domain.value import SelectionType
from desk.interface.api.dependencies import require_user

router = APIRouter(tags=["tags"], route_class=DishkaRoute)


class CreateTagGroupAPIRequest(BaseModel):
    """API request for creating a tag group."""

    name: str
    description: Optional[str] = None
    selection_type: SelectionType = SelectionType.MULTIPLE


class CreateTagAPIRequest(BaseModel):
    """API request for creating a tag."""

    name: str
    color: Optional[str] = None
    description: Optional[str] = None


class UpdateTagGroupAPIRequest(BaseModel):
    """API request for editing a tag group. Omitted fields are unchanged."""

    name: Optional[str] = None
    description: Optional[str] = None
    selection_type: Optional[SelectionType] = None
    display_order: Optional[int] = None


class UpdateTagAPIRequest(BaseModel):
    """API request for editing a tag. Omitted fields are unchanged."""

    name: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    display_order: Optional[int] = None


@router.get("/tag-groups", response_model=ListTagGroupsResponse)
async def list_tag_groups(
    list_tag_groups_use_case: FromDishka[ListTagGroupsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListTagGroupsResponse:
    """List tag groups with their tags, in display order."""
    require_user(jwt_service, auth_token)
    return await list_tag_groups_use_case.execute()


@router.post(
    "/tag-groups", response_model=TagGroupInfo, status_code=status.HTTP_201_CREATED
)
async def create_tag_group(
    request: CreateTagGroupAPIRequest,
    create_tag_group_use_case: FromDishka[CreateTagGroupUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> TagGroupInfo:
    """Create a tag group. Admin only."""
    user = require_user(jwt_service, auth_token)
    return await create_tag_group_use_case.execute(
        CreateTagGroupRequest(
            user_id=user.user_id,
            email=user.email,
            name=request.name,
            description=request.description,
            selection_type=request.selection_type,
        )
    )


@router.patch("/tag-groups/{group_id}", response_model=TagGroupInfo)
async def update_tag_group(
    group_id: UUID,
    request: UpdateTagGroupAPIRequest,
    update_tag_group_use_case: FromDishka[UpdateTagGroupUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> TagGroupInfo:
    """Edit a tag group without touching its tags. Admin only."""
    user = require_user(jwt_service, auth_token)
    return await update_tag_group_use_case.execute(
        UpdateTagGroupRequest(
            user_id=user.user_id,
            email=user.email,
            group_id=str(group_id),
            name=request.name,
            description=request.description,
            selection_type=request.selection_type,
            display_order=request.display_order,
        )
    )


@router.delete("/tag-groups/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag_group(
    group_id: UUID,
    delete_tag_group_use_case: FromDishka[DeleteTagGroupUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete a tag group and all its tags. Admin only."""
    user = require_user(jwt_service, auth_token)
    await delete_tag_group_use_case.execute(
        DeleteTagGroupRequest(
            user_id=user.user_id, email=user.email, group_id=str(group_id)
        )
    )


@router.post(
    "/tag-groups/{group_id}/tags",
    response_model=TagInfo,
    status_code=status.HTTP_201_CREATED,
)
async def create_tag(
    group_id: UUID,
    request: CreateTagAPIRequest,
    create_tag_use_case: FromDishka[CreateTagUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> TagInfo:
    """Create a tag in a group. Admin only."""
    user = require_user(jwt_service, auth_token)
    return await create_tag_use_case.execute(
        CreateTagRequest(
            user_id=user.user_id,
            email=user.email,
            group_id=str(group_id),
            name=request.name,
            color=request.color,
            description=request.description,
        )
    )


@router.patch("/tags/{tag_id}", response_model=TagInfo)
async def update_tag(
    tag_id: UUID,
    request: UpdateTagAPIRequest,
    update_tag_use_case: FromDishka[UpdateTagUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> TagInfo:
    """Rename, recolor or reorder a tag, keeping its material links. Admin only."""
    user = require_user(jwt_service, auth_token)
    return await update_tag_use_case.execute(
        UpdateTagRequest(
            user_id=user.user_id,
            email=user.email,
            tag_id=str(tag_id),
            name=request.name,
            color=request.color,
            description=request.description,
            display_order=request.display_order,
        )
    )


@router.delete("/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: UUID,
    delete_tag_use_case: FromDishka[DeleteTagUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete a tag and its material links. Admin only."""
    user = require_user(jwt_service, auth_token)
    await delete_tag_use_case.execute(
        DeleteTagRequest(user_id=user.user_id, email=user.email, tag_id=str(tag_id))
    )
