"""Tag taxonomy entities."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from desk.domain.model.common import DomainModel, utcnow
from desk.domain.value import HexColor, SelectionType, TagGroupId, TagId


class TagGroup(DomainModel):
    """Group of related tags.

    `selection_type` is a hint for clients. Single-selection groups are
    not enforced when tags are assigned.
    """

    id: TagGroupId
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    selection_type: SelectionType = SelectionType.MULTIPLE
    display_order: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)


class Tag(DomainModel):
    """Tag belonging to exactly one group."""

    id: TagId
    group_id: TagGroupId
    name: str = Field(min_length=1, max_length=100)
    color: HexColor
    description: Optional[str] = None
    display_order: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)


class TagGroupWithTags(DomainModel):
    """Tag group together with its tags in display order."""

    group: TagGroup
    tags: list[Tag]
