"""Material entity.

A material is a reference to a piece of content (text, image or video)
that the team reviews against an expected disinformation category.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from desk.domain.model.common import DomainModel, utcnow
from desk.domain.value import (
    ExpectedCategory,
    MaterialFormat,
    MaterialId,
    ReviewStateId,
    UserId,
)


class Material(DomainModel):
    """Material under review.

    The review state is the single shared mutable column of the review
    workflow. Writes to it are last-write-wins.
    """

    id: MaterialId
    url: str = Field(min_length=1, max_length=2048)
    format: MaterialFormat
    expected_category: ExpectedCategory
    source: Optional[str] = None
    description: Optional[str] = None
    subcategory: Optional[str] = None
    review_state_id: Optional[ReviewStateId] = None
    created_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class MaterialFilter(DomainModel):
    """Filters for listing materials."""

    category: Optional[ExpectedCategory] = None
    format: Optional[MaterialFormat] = None
    review_state_id: Optional[ReviewStateId] = None
    search: Optional[str] = None  # Case-insensitive match on description, source, url

    def matches(self, material: Material) -> bool:
        """Check whether a material passes this filter."""
        if self.category and material.expected_category != self.category:
            return False
        if self.format and material.format != self.format:
            return False
        if self.review_state_id and material.review_state_id != self.review_state_id:
            return False
        if self.search:
            needle = self.search.lower()
            haystack = [material.description, material.source, material.url]
            if not any(value and needle in value.lower() for value in haystack):
                return False
        return True


class StateCount(DomainModel):
    """Number of materials in one review state."""

    name: str
    color: Optional[str] = None
    count: int = 0


class MaterialStats(DomainModel):
    """Aggregate counts over all materials."""

    total: int
    by_category: dict[str, int]
    by_format: dict[str, int]
    by_state: list[StateCount]
