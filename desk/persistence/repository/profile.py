"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from desk.domain.model.profile import Profile
from desk.domain.repository.profile import ProfileRepository
from desk.domain.value import UserId
from desk.persistence.mappers import profile_to_dict, row_to_profile
from desk.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        """Find profile by user ID."""
        stmt = select(profiles_table).where(profiles_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_profile(row._asdict()) if row else None

    async def save(self, profile: Profile) -> Profile:
        """Insert or update a profile."""
        profile_dict = profile_to_dict(profile)

        existing = await self.find_by_id(profile.id)
        if existing:
            stmt = (
                update(profiles_table)
                .where(profiles_table.c.id == profile.id)
                .values(**profile_dict)
            )
        else:
            stmt = insert(profiles_table).values(**profile_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return profile
