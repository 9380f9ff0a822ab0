"""Delete tag use case."""

from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest
from desk.domain.service import ProfileService, TagService
from desk.domain.value import TagId, UserId


class DeleteTagRequest(AuthenticatedRequest):
    """Delete tag request."""

    tag_id: str  # UUID string


class DeleteTagUseCase:
    """Use case for an admin deleting a tag."""

    def __init__(self, tag_service: TagService, profile_service: ProfileService) -> None:
        self.tag_service = tag_service
        self.profile_service = profile_service

    async def execute(self, request: DeleteTagRequest) -> None:
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "manage tags")
        await self.tag_service.delete_tag(TagId(UUID(request.tag_id)))
