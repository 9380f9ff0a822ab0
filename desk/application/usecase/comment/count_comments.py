"""Count comments use case."""

from uuid import UUID

from pydantic import BaseModel

from desk.domain.service import CommentService
from desk.domain.value import MaterialId


class CountCommentsRequest(BaseModel):
    """Count comments request."""

    material_ids: list[str]  # UUID strings


class CountCommentsResponse(BaseModel):
    """Count comments response. Materials without comments map to 0."""

    counts: dict[str, int]


class CountCommentsUseCase:
    """Use case for comment counts over several materials."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: CountCommentsRequest) -> CountCommentsResponse:
        material_ids = [MaterialId(UUID(m)) for m in dict.fromkeys(request.material_ids)]
        counts = await self.comment_service.count_comments(material_ids)
        return CountCommentsResponse(
            counts={str(m): counts.get(m, 0) for m in material_ids}
        )
