"""List tag groups use case."""

from pydantic import BaseModel

from desk.application.usecase.dto import TagGroupInfo
from desk.domain.service import TagService


class ListTagGroupsResponse(BaseModel):
    """List tag groups response."""

    groups: list[TagGroupInfo]  # Groups and tags in display order


class ListTagGroupsUseCase:
    """Use case for listing tag groups with their tags."""

    def __init__(self, tag_service: TagService) -> None:
        self.tag_service = tag_service

    async def execute(self) -> ListTagGroupsResponse:
        groups = await self.tag_service.list_groups_with_tags()
        return ListTagGroupsResponse(
            groups=[TagGroupInfo.from_domain(g.group, g.tags) for g in groups]
        )
