"""Ephemeral review coordination models.

Neither of these is written to the database. Locks live in the presence
channel and sessions live in server memory.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from desk.domain.model.common import DomainModel, utcnow
from desk.domain.value import MaterialId, ReviewSessionId, ReviewStateId, UserId


class Lock(DomainModel):
    """Soft lock: an editor tracking a material in the presence channel."""

    material_id: MaterialId
    editor: str
    editor_key: str
    locked_at: datetime


class ReviewSession(DomainModel):
    """An editor's open edit session on a material.

    `prior_state_id` is the effective state to restore if the session ends
    without a save. It never refers to a transient state.
    """

    id: ReviewSessionId
    material_id: MaterialId
    editor: str
    editor_key: str
    user_id: UserId
    prior_state_id: Optional[ReviewStateId] = None
    started_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check whether the session outlived its TTL."""
        return now >= self.expires_at
