"""List review states use case."""

from pydantic import BaseModel

from desk.application.usecase.dto import ReviewStateInfo
from desk.domain.service import ReviewStateService


class ListStatesResponse(BaseModel):
    """List review states response."""

    states: list[ReviewStateInfo]  # In display order


class ListStatesUseCase:
    """Use case for listing review states."""

    def __init__(self, review_state_service: ReviewStateService) -> None:
        self.review_state_service = review_state_service

    async def execute(self) -> ListStatesResponse:
        states = await self.review_state_service.list_states()
        return ListStatesResponse(
            states=[ReviewStateInfo.from_domain(s) for s in states]
        )
