"""Create tag use case."""

from typing import Optional
from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, TagInfo
from desk.domain.service import ProfileService, TagService
from desk.domain.value import TagGroupId, UserId


class CreateTagRequest(AuthenticatedRequest):
    """Create tag request."""

    group_id: str  # UUID string
    name: str
    color: Optional[str] = None  # "#RRGGBB", grey when omitted
    description: Optional[str] = None


class CreateTagUseCase:
    """Use case for an admin adding a tag to a group."""

    def __init__(self, tag_service: TagService, profile_service: ProfileService) -> None:
        self.tag_service = tag_service
        self.profile_service = profile_service

    async def execute(self, request: CreateTagRequest) -> TagInfo:
        """Execute create tag flow.

        Raises:
            NotAuthorizedError: If the user is not an admin
            NotFoundError: If the group does not exist
            ValidationError: If name or color are invalid
            BusinessRuleViolationError: If the group already has the name
        """
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "manage tags")

        tag = await self.tag_service.create_tag(
            TagGroupId(UUID(request.group_id)),
            request.name,
            color=request.color,
            description=request.description,
        )
        return TagInfo.from_domain(tag)
