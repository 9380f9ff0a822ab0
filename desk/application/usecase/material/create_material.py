"""Create material use case."""

from typing import Optional
from uuid import UUID

from desk.application.usecase.dto import AuthenticatedRequest, MaterialInfo
from desk.domain.error import InvalidReferenceError
from desk.domain.service import MaterialService, ReviewStateService
from desk.domain.value import ExpectedCategory, MaterialFormat, ReviewStateId, UserId


class CreateMaterialRequest(AuthenticatedRequest):
    """Create material request."""

    url: str
    format: MaterialFormat
    expected_category: ExpectedCategory
    source: Optional[str] = None
    description: Optional[str] = None
    subcategory: Optional[str] = None
    review_state_id: Optional[str] = None  # Defaults to the default state


class CreateMaterialUseCase:
    """Use case for registering a material to review."""

    def __init__(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
    ) -> None:
        """Initialize create material use case.

        Args:
            material_service: Material domain service
            review_state_service: Review state domain service
        """
        self.material_service = material_service
        self.review_state_service = review_state_service

    async def execute(self, request: CreateMaterialRequest) -> MaterialInfo:
        """Execute create material flow.

        Steps:
        1. Pick the starting state (requested one or the default)
        2. Create the material

        Raises:
            ValidationError: If the URL is empty
            InvalidReferenceError: If the requested state does not exist
        """
        if request.review_state_id:
            state = await self.review_state_service.find_state(
                ReviewStateId(UUID(request.review_state_id))
            )
            if state is None:
                raise InvalidReferenceError("review state", request.review_state_id)
        else:
            state = await self.review_state_service.get_default_state()

        material = await self.material_service.create_material(
            url=request.url,
            format=request.format,
            expected_category=request.expected_category,
            created_by=UserId(UUID(request.user_id)),
            review_state_id=state.id if state else None,
            source=request.source,
            description=request.description,
            subcategory=request.subcategory,
        )
        return MaterialInfo.from_domain(material, state)
