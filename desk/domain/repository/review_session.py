"""Review session store interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from desk.domain.model.session import ReviewSession
from desk.domain.value import MaterialId, ReviewSessionId


class ReviewSessionRepository(ABC):
    """Store for open review sessions.

    Sessions live in server memory only. The store keeps at most one
    session per (material, editor) pair.
    """

    @abstractmethod
    async def add(self, session: ReviewSession) -> ReviewSession:
        """Store a session, replacing an earlier one of the same editor.

        Args:
            session: Session to store

        Returns:
            The stored session
        """
        pass

    @abstractmethod
    async def claim(self, session: ReviewSession, now: datetime) -> Optional[ReviewSession]:
        """Store a session unless another editor holds a live one.

        Check and insert happen as one step.

        Args:
            session: Session to store
            now: Current time, used to ignore expired sessions

        Returns:
            The conflicting live session, or None if the claim succeeded
        """
        pass

    @abstractmethod
    async def find_by_id(self, session_id: ReviewSessionId) -> Optional[ReviewSession]:
        """Find a session by ID."""
        pass

    @abstractmethod
    async def find_by_material(self, material_id: MaterialId) -> list[ReviewSession]:
        """Find all sessions on a material, oldest first."""
        pass

    @abstractmethod
    async def touch(
        self, session_id: ReviewSessionId, expires_at: datetime
    ) -> Optional[ReviewSession]:
        """Extend a session's expiry.

        Returns:
            The refreshed session, None if it does not exist
        """
        pass

    @abstractmethod
    async def remove(self, session_id: ReviewSessionId) -> Optional[ReviewSession]:
        """Remove a session.

        Returns:
            The removed session, None if it did not exist
        """
        pass

    @abstractmethod
    async def purge_expired(self, now: datetime) -> list[ReviewSession]:
        """Remove and return every session whose TTL has passed."""
        pass
