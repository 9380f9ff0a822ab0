"""Material routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from desk.application.usecase.dto import MaterialInfo
from desk.application.usecase.material import (
    CreateMaterialRequest,
    CreateMaterialUseCase,
    DeleteMaterialRequest,
    DeleteMaterialUseCase,
    GetMaterialRequest,
    GetMaterialResponse,
    GetMaterialStatsResponse,
    GetMaterialStatsUseCase,
    GetMaterialUseCase,
    ListMaterialsRequest,
    ListMaterialsResponse,
    ListMaterialsUseCase,
    UpdateMaterialRequest,
    UpdateMaterialUseCase,
)
from desk.domain.service import JWTService
from desk.domain.value import ExpectedCategory, MaterialFormat
from desk.interface.api.dependencies import require_user

router = APIRouter(prefix="/materials", tags=["materials"], route_class=DishkaRoute)


class CreateMaterialAPIRequest(BaseModel):
    """API request for registering a material."""

    url: str = Field(min_length=1, max_length=2048)
    format: MaterialFormat
    expected_category: ExpectedCategory
    source: Optional[str] = None
    description: Optional[str] = None
    subcategory: Optional[str] = None
    review_state_id: Optional[UUID] = None


class UpdateMaterialAPIRequest(BaseModel):
    """API request for editing a material. Only sent fields change."""

    url: Optional[str] = Field(default=None, min_length=1, max_length=2048)
    format: Optional[MaterialFormat] = None
    expected_category: Optional[ExpectedCategory] = None
    source: Optional[str] = None
    description: Optional[str] = None
    subcategory: Optional[str] = None


@router.get("", response_model=ListMaterialsResponse)
async def list_materials(
    list_materials_use_case: FromDishka[ListMaterialsUseCase],
    jwt_service: FromDishka[JWTService],
    category: Optional[ExpectedCategory] = Query(default=None),
    format: Optional[MaterialFormat] = Query(default=None),
    state_id: Optional[UUID] = Query(default=None),
    search: Optional[str] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListMaterialsResponse:
    """List materials newest first, optionally filtered.

    Args:
        category: Expected category filter
        format: Content format filter
        state_id: Review state filter
        search: Case-insensitive substring of description, source or URL
        limit: Page size
        offset: Page offset

    Returns:
        Materials with their review state and comment count
    """
    require_user(jwt_service, auth_token)
    return await list_materials_use_case.execute(
        ListMaterialsRequest(
            category=category,
            format=format,
            review_state_id=str(state_id) if state_id else None,
            search=search,
            limit=limit,
            offset=offset,
        )
    )


@router.post("", response_model=MaterialInfo, status_code=status.HTTP_201_CREATED)
async def create_material(
    request: CreateMaterialAPIRequest,
    create_material_use_case: FromDishka[CreateMaterialUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MaterialInfo:
    """Register a material. It starts in the default review state."""
    user = require_user(jwt_service, auth_token)
    return await create_material_use_case.execute(
        CreateMaterialRequest(
            user_id=user.user_id,
            email=user.email,
            url=request.url,
            format=request.format,
            expected_category=request.expected_category,
            source=request.source,
            description=request.description,
            subcategory=request.subcategory,
            review_state_id=str(request.review_state_id)
            if request.review_state_id
            else None,
        )
    )


@router.get("/stats", response_model=GetMaterialStatsResponse)
async def get_material_stats(
    get_material_stats_use_case: FromDishka[GetMaterialStatsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetMaterialStatsResponse:
    """Material counts by category, format and review state."""
    require_user(jwt_service, auth_token)
    return await get_material_stats_use_case.execute()


@router.get("/{material_id}", response_model=GetMaterialResponse)
async def get_material(
    material_id: UUID,
    get_material_use_case: FromDishka[GetMaterialUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetMaterialResponse:
    """Get a material with its review state, tag IDs and comment count."""
    require_user(jwt_service, auth_token)
    return await get_material_use_case.execute(
        GetMaterialRequest(material_id=str(material_id))
    )


@router.patch("/{material_id}", response_model=MaterialInfo)
async def update_material(
    material_id: UUID,
    request: UpdateMaterialAPIRequest,
    update_material_use_case: FromDishka[UpdateMaterialUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MaterialInfo:
    """Edit a material's descriptive fields. Admin only."""
    user = require_user(jwt_service, auth_token)
    return await update_material_use_case.execute(
        UpdateMaterialRequest(
            user_id=user.user_id,
            email=user.email,
            material_id=str(material_id),
            **request.model_dump(exclude_unset=True),
        )
    )


@router.delete("/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_material(
    material_id: UUID,
    delete_material_use_case: FromDishka[DeleteMaterialUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete a material with its comments and tag links. Admin only."""
    user = require_user(jwt_service, auth_token)
    await delete_material_use_case.execute(
        DeleteMaterialRequest(
            user_id=user.user_id, email=user.email, material_id=str(material_id)
        )
    )
