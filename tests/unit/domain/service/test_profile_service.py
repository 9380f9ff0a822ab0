"""Unit tests for ProfileService."""

from uuid import uuid4

import pytest

from desk.domain.error import NotAuthorizedError
from desk.domain.model.profile import CurrentUser
from desk.domain.service import ProfileService
from desk.domain.value import UserId, UserRole
from desk.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import add_profile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestResolveCurrentUser:
    """Tests for resolve_current_user."""

    @pytest.mark.asyncio
    async def test_user_without_profile_is_regular(self, unit_env):
        """Unknown users act with the regular role."""
        # Arrange
        service = await unit_env.get(ProfileService)
        user_id = UserId(uuid4())

        # Act
        user = await service.resolve_current_user(user_id, "ana@example.org")

        # Assert
        assert user.id == user_id
        assert user.role == UserRole.REGULAR
        assert user.is_admin is False

    @pytest.mark.asyncio
    async def test_stored_role_is_used(self, unit_env):
        """The stored profile decides the role."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        profile = add_profile(store, "lead@example.org", UserRole.ADMIN)
        service = await unit_env.get(ProfileService)

        # Act
        user = await service.resolve_current_user(profile.id, "lead@example.org")

        # Assert
        assert user.is_admin is True


class TestRequireAdmin:
    """Tests for require_admin."""

    @pytest.mark.asyncio
    async def test_regular_user_refused(self, unit_env):
        """Regular users cannot perform admin actions."""
        # Arrange
        service = await unit_env.get(ProfileService)
        user = CurrentUser(id=UserId(uuid4()), email="ana@example.org")

        # Act & Assert
        with pytest.raises(NotAuthorizedError) as exc_info:
            service.require_admin(user, "manage tags")
        assert exc_info.value.action == "manage tags"

    @pytest.mark.asyncio
    async def test_admin_allowed(self, unit_env):
        """Admins pass the check."""
        # Arrange
        service = await unit_env.get(ProfileService)
        user = CurrentUser(
            id=UserId(uuid4()), email="lead@example.org", role=UserRole.ADMIN
        )

        # Act
        service.require_admin(user, "manage tags")

        # Assert
        assert user.is_admin is True
