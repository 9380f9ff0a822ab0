"""In-memory implementation of Profile repository for testing."""

from typing import Optional

from desk.domain.model.profile import Profile
from desk.domain.repository.profile import ProfileRepository
from desk.domain.value import UserId
from desk.persistence.repository.inmemory.store import InMemoryDatabase


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self, store: Optional[InMemoryDatabase] = None) -> None:
        """Initialize repository on a shared or fresh store."""
        self.store = store or InMemoryDatabase()

    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        """Find profile by user ID."""
        return self.store.profiles.get(user_id)

    async def save(self, profile: Profile) -> Profile:
        """Insert or update a profile."""
        self.store.profiles[profile.id] = profile
        return profile
