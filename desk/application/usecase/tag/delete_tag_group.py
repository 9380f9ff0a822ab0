"""Delete tag group use case."""

from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest
from desk.domain.service import ProfileService, TagService
from desk.domain.value import TagGroupId, UserId


class DeleteTagGroupRequest(AuthenticatedRequest):
    """Delete tag group request."""

    group_id: str  # UUID string


class DeleteTagGroupUseCase:
    """Use case for an admin deleting a tag group and its tags."""

    def __init__(self, tag_service: TagService, profile_service: ProfileService) -> None:
        self.tag_service = tag_service
        self.profile_service = profile_service

    async def execute(self, request: DeleteTagGroupRequest) -> None:
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "manage tags")
        await self.tag_service.delete_group(TagGroupId(UUID(request.group_id)))
