"""PostgreSQL implementation of ReviewState repository."""

from typing import Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from desk.domain.model.review_state import ReviewState
from desk.domain.repository.review_state import ReviewStateRepository
from desk.domain.value import ReviewStateId, ReviewStateKind
from desk.persistence.mappers import review_state_to_dict, row_to_review_state
from desk.persistence.tables import review_states_table


class PostgresReviewStateRepository(ReviewStateRepository):
    """PostgreSQL implementation of ReviewStateRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_id(self, state_id: ReviewStateId) -> Optional[ReviewState]:
        """Find review state by ID."""
        stmt = select(review_states_table).where(review_states_table.c.id == state_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_review_state(row._asdict()) if row else None

    async def find_by_name(self, name: str) -> Optional[ReviewState]:
        """Find review state by case-insensitive name."""
        stmt = select(review_states_table).where(
            func.lower(review_states_table.c.name) == name.lower()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_review_state(row._asdict()) if row else None

    async def find_by_kind(self, kind: ReviewStateKind) -> Optional[ReviewState]:
        """Find the first review state of a workflow kind."""
        stmt = (
            select(review_states_table)
            .where(review_states_table.c.kind == kind.value)
            .order_by(review_states_table.c.display_order)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_review_state(row._asdict()) if row else None

    async def find_default(self) -> Optional[ReviewState]:
        """Find the default review state."""
        stmt = select(review_states_table).where(review_states_table.c.is_default)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_review_state(row._asdict()) if row else None

    async def find_all(self) -> list[ReviewState]:
        """Find all review states in display order."""
        stmt = select(review_states_table).order_by(
            review_states_table.c.display_order, review_states_table.c.name
        )
        result = await self.session.execute(stmt)
        return [row_to_review_state(row._asdict()) for row in result.fetchall()]

    async def next_display_order(self) -> int:
        """Get max display order plus one."""
        stmt = select(func.coalesce(func.max(review_states_table.c.display_order), -1))
        result = await self.session.execute(stmt)
        return result.scalar_one() + 1

    async def save(self, state: ReviewState) -> ReviewState:
        """Insert or update a review state."""
        state_dict = review_state_to_dict(state)

        existing = await self.find_by_id(state.id)
        if existing:
            stmt = (
                update(review_states_table)
                .where(review_states_table.c.id == state.id)
                .values(**state_dict)
            )
        else:
            stmt = insert(review_states_table).values(**state_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return state

    async def set_default(self, state_id: ReviewStateId) -> None:
        """Move the default flag inside the request transaction."""
        await self.session.execute(
            update(review_states_table)
            .where(review_states_table.c.is_default, review_states_table.c.id != state_id)
            .values(is_default=False)
        )
        await self.session.flush()
        await self.session.execute(
            update(review_states_table)
            .where(review_states_table.c.id == state_id)
            .values(is_default=True)
        )
        await self.session.flush()

    async def delete(self, state_id: ReviewStateId) -> None:
        """Delete a review state; material references are set to NULL."""
        stmt = delete(review_states_table).where(review_states_table.c.id == state_id)
        await self.session.execute(stmt)
        await self.session.flush()
