"""Review state entity."""

from datetime import datetime

from pydantic import Field

from desk.domain.model.common import DomainModel, utcnow
from desk.domain.value import HexColor, ReviewStateId, ReviewStateKind


class ReviewState(DomainModel):
    """A named, colored workflow label attached to materials.

    The workflow never looks at the name. It relies on `kind`, which is set
    at creation and cannot be changed afterwards.
    """

    id: ReviewStateId
    name: str = Field(min_length=1, max_length=100)
    color: HexColor
    display_order: int = Field(default=0, ge=0)
    is_default: bool = False
    kind: ReviewStateKind = ReviewStateKind.NORMAL
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_transient(self) -> bool:
        """Whether this state only marks an edit session in progress."""
        return self.kind == ReviewStateKind.TRANSIENT

    @property
    def is_protected(self) -> bool:
        """Protected states drive the workflow and cannot be deleted."""
        return self.kind != ReviewStateKind.NORMAL
