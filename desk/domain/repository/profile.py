"""Profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from desk.domain.model.profile import Profile
from desk.domain.value import UserId


class ProfileRepository(ABC):
    """Repository for user profiles (roles)."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[Profile]:
        """Find a profile by user ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Insert or update a profile.

        Args:
            profile: Profile to save

        Returns:
            The saved profile
        """
        pass
