"""Create tag group use case."""

from typing import Optional
from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, TagGroupInfo
from desk.domain.service import ProfileService, TagService
from desk.domain.value import SelectionType, UserId


class CreateTagGroupRequest(AuthenticatedRequest):
    """Create tag group request."""

    name: str
    description: Optional[str] = None
    selection_type: SelectionType = SelectionType.MULTIPLE


class CreateTagGroupUseCase:
    """Use case for an admin adding a tag group."""

    def __init__(self, tag_service: TagService, profile_service: ProfileService) -> None:
        self.tag_service = tag_service
        self.profile_service = profile_service

    async def execute(self, request: CreateTagGroupRequest) -> TagGroupInfo:
        """Execute create tag group flow.

        Raises:
            NotAuthorizedError: If the user is not an admin
            ValidationError: If the name is invalid
            BusinessRuleViolationError: If the name is taken
        """
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "manage tags")

        group = await self.tag_service.create_group(
            request.name, request.description, request.selection_type
        )
        return TagGroupInfo.from_domain(group, [])
