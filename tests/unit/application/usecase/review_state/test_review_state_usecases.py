"""Unit tests for review state use cases."""

from uuid import uuid4

import pytest

from desk.application.usecase.review_state import (
    CreateStateRequest,
    CreateStateUseCase,
    ListStatesUseCase,
    SetDefaultStateRequest,
    SetDefaultStateUseCase,
)
from desk.domain.error import NotAuthorizedError
from desk.domain.value import UserRole
from desk.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import add_profile, seed_review_states
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestReviewStateUseCases:
    """Tests for listing and managing review states."""

    @pytest.mark.asyncio
    async def test_list_states_in_display_order(self, unit_env):
        """Anyone can list the states in order."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        seed_review_states(store)
        use_case = await unit_env.get(ListStatesUseCase)

        # Act
        result = await use_case.execute()

        # Assert
        assert [s.name for s in result.states] == [
            "Pending",
            "In progress",
            "Analyzed",
            "Incomplete",
            "Needs review",
        ]

    @pytest.mark.asyncio
    async def test_regular_user_cannot_create_state(self, unit_env):
        """Managing states needs the admin role."""
        # Arrange
        use_case = await unit_env.get(CreateStateUseCase)

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                CreateStateRequest(
                    user_id=str(uuid4()),
                    email="ana@example.org",
                    name="Escalated",
                    color="#EF4444",
                )
            )

    @pytest.mark.asyncio
    async def test_admin_creates_state(self, unit_env):
        """Admins can add states."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        admin = add_profile(store, "lead@example.org", UserRole.ADMIN)
        use_case = await unit_env.get(CreateStateUseCase)

        # Act
        result = await use_case.execute(
            CreateStateRequest(
                user_id=str(admin.id),
                email=admin.email,
                name="Escalated",
                color="#EF4444",
            )
        )

        # Assert
        assert result.name == "Escalated"
        assert result.color == "#EF4444"

    @pytest.mark.asyncio
    async def test_admin_sets_default_state(self, unit_env):
        """Admins can move the default flag."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        admin = add_profile(store, "lead@example.org", UserRole.ADMIN)
        use_case = await unit_env.get(SetDefaultStateUseCase)

        # Act
        result = await use_case.execute(
            SetDefaultStateRequest(
                user_id=str(admin.id),
                email=admin.email,
                state_id=str(states["analyzed"].id),
            )
        )

        # Assert
        assert result.is_default is True
        assert store.review_states[states["pending"].id].is_default is False
