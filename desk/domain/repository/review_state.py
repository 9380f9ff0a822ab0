"""Review state repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from desk.domain.model.review_state import ReviewState
from desk.domain.value import ReviewStateId, ReviewStateKind


class ReviewStateRepository(ABC):
    """Repository for ReviewState entity."""

    @abstractmethod
    async def find_by_id(self, state_id: ReviewStateId) -> Optional[ReviewState]:
        """Find a review state by ID.

        Args:
            state_id: The state's unique identifier

        Returns:
            The state if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[ReviewState]:
        """Find a review state by name (case-insensitive).

        Args:
            name: State name

        Returns:
            The state if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_kind(self, kind: ReviewStateKind) -> Optional[ReviewState]:
        """Find the first state (by display order) of a given kind.

        Args:
            kind: Workflow kind to look for

        Returns:
            The state if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_default(self) -> Optional[ReviewState]:
        """Find the state flagged as default for new materials."""
        pass

    @abstractmethod
    async def find_all(self) -> list[ReviewState]:
        """Find all states ordered by display order."""
        pass

    @abstractmethod
    async def next_display_order(self) -> int:
        """Get the display order for a state appended at the end."""
        pass

    @abstractmethod
    async def save(self, state: ReviewState) -> ReviewState:
        """Insert or update a review state.

        Args:
            state: State to save

        Returns:
            The saved state
        """
        pass

    @abstractmethod
    async def set_default(self, state_id: ReviewStateId) -> None:
        """Move the default flag to the given state.

        All other states lose the flag in the same operation.

        Args:
            state_id: State that becomes the default
        """
        pass

    @abstractmethod
    async def delete(self, state_id: ReviewStateId) -> None:
        """Delete a review state.

        Materials referring to it are left without a state.

        Args:
            state_id: State to delete
        """
        pass
