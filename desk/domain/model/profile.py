"""Profile entity and signed-in user."""

from datetime import datetime

from pydantic import Field

from desk.domain.model.common import DomainModel, utcnow
from desk.domain.value import UserId, UserRole


class Profile(DomainModel):
    """Stored role of a user known to the identity provider."""

    id: UserId
    email: str = Field(min_length=1, max_length=255)
    role: UserRole = UserRole.REGULAR
    created_at: datetime = Field(default_factory=utcnow)


class CurrentUser(DomainModel):
    """The user behind an authenticated request."""

    id: UserId
    email: str
    role: UserRole = UserRole.REGULAR

    @property
    def is_admin(self) -> bool:
        """Whether the user holds the admin role."""
        return self.role == UserRole.ADMIN
