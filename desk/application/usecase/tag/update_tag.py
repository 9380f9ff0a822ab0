"""Update tag use case."""

from typing import Optional
from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, TagInfo
from desk.domain.service import ProfileService, TagService
from desk.domain.value import TagId, UserId


class UpdateTagRequest(AuthenticatedRequest):
    """Update tag request. Unset fields are left unchanged."""

    tag_id: str  # UUID string
    name: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None  # Blank clears it
    display_order: Optional[int] = None


class UpdateTagUseCase:
    """Use case for an admin renaming, recoloring or reordering a tag."""

    def __init__(self, tag_service: TagService, profile_service: ProfileService) -> None:
        self.tag_service = tag_service
        self.profile_service = profile_service

    async def execute(self, request: UpdateTagRequest) -> TagInfo:
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "manage tags")

        tag = await self.tag_service.update_tag(
            TagId(UUID(request.tag_id)),
            name=request.name,
            color=request.color,
            description=request.description,
            display_order=request.display_order,
        )
        return TagInfo.from_domain(tag)
