"""Update tag group use case."""

from typing import Optional
from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, TagGroupInfo
from desk.domain.service import ProfileService, TagService
from desk.domain.value import SelectionType, TagGroupId, UserId


class UpdateTagGroupRequest(AuthenticatedRequest):
    """Update tag group request. Unset fields are left unchanged."""

    group_id: str  # UUID string
    name: Optional[str] = None
    description: Optional[str] = None  # Blank clears it
    selection_type: Optional[SelectionType] = None
    display_order: Optional[int] = None


class UpdateTagGroupUseCase:
    """Use case for an admin editing a tag group."""

    def __init__(self, tag_service: TagService, profile_service: ProfileService) -> None:
        self.tag_service = tag_service
        self.profile_service = profile_service

    async def execute(self, request: UpdateTagGroupRequest) -> TagGroupInfo:
        """Execute update tag group flow.

        Returns:
            The group with its tags

        Raises:
            NotAuthorizedError: If the user is not an admin
            NotFoundError: If the group does not exist
            BusinessRuleViolationError: If the new name is taken
        """
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "manage tags")

        group = await self.tag_service.update_group(
            TagGroupId(UUID(request.group_id)),
            name=request.name,
            description=request.description,
            selection_type=request.selection_type,
            display_order=request.display_order,
        )
        groups = await self.tag_service.list_groups_with_tags()
        tags = next((g.tags for g in groups if g.group.id == group.id), [])
        return TagGroupInfo.from_domain(group, tags)
