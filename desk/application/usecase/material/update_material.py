"""Update material use case."""

from typing import Optional
from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, MaterialInfo
from desk.domain.service import MaterialService, ProfileService, ReviewStateService
from desk.domain.value import ExpectedCategory, MaterialFormat, MaterialId, UserId

# Fields that may be cleared with an explicit null
OPTIONAL_FIELDS = frozenset({"source", "description", "subcategory"})


class UpdateMaterialRequest(AuthenticatedRequest):
    """Update material request. Unset fields are left unchanged."""

    material_id: str  # UUID string
    url: Optional[str] = None
    format: Optional[MaterialFormat] = None
    expected_category: Optional[ExpectedCategory] = None
    source: Optional[str] = None
    description: Optional[str] = None
    subcategory: Optional[str] = None


class UpdateMaterialUseCase:
    """Use case for an admin editing a material's descriptive fields."""

    def __init__(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
        profile_service: ProfileService,
    ) -> None:
        self.material_service = material_service
        self.review_state_service = review_state_service
        self.profile_service = profile_service

    async def execute(self, request: UpdateMaterialRequest) -> MaterialInfo:
        """Execute update material flow.

        The review state is not editable here; it only changes through the
        review workflow.

        Raises:
            NotAuthorizedError: If the user is not an admin
            NotFoundError: If the material does not exist
            ValidationError: If the URL is emptied
        """
        user = await self.profile_service.resolve_current_user(
            UserId(UUID(request.user_id)), request.email
        )
        self.profile_service.require_admin(user, "edit materials")

        fields = {
            name: value
            for name, value in request.model_dump(
                exclude_unset=True, exclude={"user_id", "email", "material_id"}
            ).items()
            if value is not None or name in OPTIONAL_FIELDS
        }
        material = await self.material_service.update_material(
            MaterialId(UUID(request.material_id)), **fields
        )
        state = await self.review_state_service.find_state(material.review_state_id)
        return MaterialInfo.from_domain(material, state)
