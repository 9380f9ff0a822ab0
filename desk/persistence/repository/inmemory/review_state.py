"""In-memory implementation of ReviewState repository for testing."""

from typing import Optional

from desk.domain.model.review_state import ReviewState
from desk.domain.repository.review_state import ReviewStateRepository
from desk.domain.value import ReviewStateId, ReviewStateKind
from desk.persistence.repository.inmemory.store import InMemoryDatabase


class InMemoryReviewStateRepository(ReviewStateRepository):
    """In-memory implementation of ReviewStateRepository for testing."""

    def __init__(self, store: Optional[InMemoryDatabase] = None) -> None:
        """Initialize repository on a shared or fresh store."""
        self.store = store or InMemoryDatabase()

    async def find_by_id(self, state_id: ReviewStateId) -> Optional[ReviewState]:
        """Find review state by ID."""
        return self.store.review_states.get(state_id)

    async def find_by_name(self, name: str) -> Optional[ReviewState]:
        """Find review state by case-insensitive name."""
        return next(
            (
                s
                for s in self.store.review_states.values()
                if s.name.lower() == name.lower()
            ),
            None,
        )

    async def find_by_kind(self, kind: ReviewStateKind) -> Optional[ReviewState]:
        """Find the first review state of a workflow kind."""
        states = [s for s in await self.find_all() if s.kind == kind]
        return states[0] if states else None

    async def find_default(self) -> Optional[ReviewState]:
        """Find the default review state."""
        return next((s for s in self.store.review_states.values() if s.is_default), None)

    async def find_all(self) -> list[ReviewState]:
        """Find all review states in display order."""
        return sorted(
            self.store.review_states.values(), key=lambda s: (s.display_order, s.name)
        )

    async def next_display_order(self) -> int:
        """Get max display order plus one."""
        orders = [s.display_order for s in self.store.review_states.values()]
        return max(orders, default=-1) + 1

    async def save(self, state: ReviewState) -> ReviewState:
        """Insert or update a review state."""
        self.store.review_states[state.id] = state
        return state

    async def set_default(self, state_id: ReviewStateId) -> None:
        """Move the default flag to one state."""
        for sid, state in list(self.store.review_states.items()):
            is_default = sid == state_id
            if state.is_default != is_default:
                self.store.review_states[sid] = state.model_copy(
                    update={"is_default": is_default}
                )

    async def delete(self, state_id: ReviewStateId) -> None:
        """Delete a review state and clear references to it."""
        self.store.review_states.pop(state_id, None)
        for mid, material in list(self.store.materials.items()):
            if material.review_state_id == state_id:
                self.store.materials[mid] = material.model_copy(
                    update={"review_state_id": None}
                )
        for cid, comment in list(self.store.comments.items()):
            if comment.review_state_id == state_id:
                self.store.comments[cid] = comment.model_copy(
                    update={"review_state_id": None}
                )
