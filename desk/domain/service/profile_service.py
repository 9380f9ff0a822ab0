"""Profile domain service."""

import logfire

from desk.domain.error import NotAuthorizedError
from desk.domain.model.profile import CurrentUser
from desk.domain.repository import ProfileRepository
from desk.domain.value import UserId, UserRole

from .base import Service


class ProfileService(Service):
    """Domain service resolving users and their roles."""

    def __init__(self, profile_repository: ProfileRepository) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
        """
        self.profile_repository = profile_repository

    async def resolve_current_user(self, user_id: UserId, email: str) -> CurrentUser:
        """Build the signed-in user from token claims and the stored profile.

        Users without a profile act with the regular role.

        Args:
            user_id: User ID from the token
            email: E-mail from the token

        Returns:
            The current user with role
        """
        profile = await self.profile_repository.find_by_id(user_id)
        if profile is None:
            logfire.debug("No profile for user, using regular role", user_id=str(user_id))
            return CurrentUser(id=user_id, email=email, role=UserRole.REGULAR)
        return CurrentUser(id=user_id, email=profile.email, role=profile.role)

    def require_admin(self, user: CurrentUser, action: str) -> None:
        """Ensure a user holds the admin role.

        Raises:
            NotAuthorizedError: If the user is not an admin
        """
        if not user.is_admin:
            logfire.warn(
                "Admin role required", user_id=str(user.id), action=action
            )
            raise NotAuthorizedError(action, str(user.id))
