"""Delete material use case."""

from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest
from desk.domain.service import MaterialService, ProfileService
from desk.domain.value import MaterialId, UserId


class DeleteMaterialRequest(AuthenticatedRequest):
    """Delete material request."""

    material_id: str  # UUID string


class DeleteMaterialUseCase:
    """Use case for an admin deleting a material with its comments and tags."""

    def __init__(
        self, material_service: MaterialService, profile_service: ProfileService
    ) -> None:
        self.material_service = material_service
        self.profile_service = profile_service

    async def execute(self, request: DeleteMaterialRequest) -> None:
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "delete materials")
        await self.material_service.delete_material(MaterialId(UUID(request.material_id)))
