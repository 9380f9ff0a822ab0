"""Get material stats use case."""

from pydantic import BaseModel

from desk.domain.service import MaterialService, ReviewStateService


class StateCountInfo(BaseModel):
    """Materials in one review state."""

    name: str
    color: str | None
    count: int


class GetMaterialStatsResponse(BaseModel):
    """Get material stats response."""

    total: int
    by_category: dict[str, int]
    by_format: dict[str, int]
    by_state: list[StateCountInfo]


class GetMaterialStatsUseCase:
    """Use case for the dashboard counters."""

    def __init__(
        self,
        material_service: MaterialService,
        review_state_service: ReviewStateService,
    ) -> None:
        self.material_service = material_service
        self.review_state_service = review_state_service

    async def execute(self) -> GetMaterialStatsResponse:
        states = await self.review_state_service.list_states()
        stats = await self.material_service.get_stats(states)
        return GetMaterialStatsResponse(
            total=stats.total,
            by_category=stats.by_category,
            by_format=stats.by_format,
            by_state=[
                StateCountInfo(name=s.name, color=s.color, count=s.count)
                for s in stats.by_state
            ],
        )
