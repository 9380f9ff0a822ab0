"""Revert state use case."""

from uuid import UUID

from pydantic import BaseModel

from desk.domain.service import ReviewWorkflowService
from desk.domain.value import MaterialId, ReviewStateId


class RevertStateRequest(BaseModel):
    """Revert state request sent by a closing page."""

    material_id: str  # UUID string
    previous_state_id: str | None = None
    caller_email: str | None = None  # Set when the beacon carried a valid cookie


class RevertStateResponse(BaseModel):
    """Revert state response."""

    success: bool


class RevertStateUseCase:
    """Use case for restoring a material whose editor left without saving."""

    def __init__(self, workflow_service: ReviewWorkflowService) -> None:
        self.workflow_service = workflow_service

    async def execute(self, request: RevertStateRequest) -> RevertStateResponse:
        """Execute revert state flow.

        Malformed identifiers are reported as a failed revert. Without a
        caller, only sessions that look abandoned are ended.
        """
        try:
            material_id = MaterialId(UUID(request.material_id))
            previous_state_id = (
                ReviewStateId(UUID(request.previous_state_id))
                if request.previous_state_id
                else None
            )
        except ValueError:
            return RevertStateResponse(success=False)

        reverted = await self.workflow_service.revert_abandoned(
            material_id, previous_state_id, caller_identity=request.caller_email
        )
        return RevertStateResponse(success=reverted)
