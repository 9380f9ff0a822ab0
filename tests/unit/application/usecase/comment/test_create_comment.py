"""Unit tests for comment use cases."""

from uuid import uuid4

import pytest

from desk.application.usecase.comment import (
    CountCommentsRequest,
    CountCommentsUseCase,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from desk.domain.error import NotAuthorizedError, NotFoundError
from desk.domain.value import UserRole
from desk.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import add_material, add_profile, seed_review_states
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_comment_stamped_with_material_state(self, unit_env):
        """A standalone comment records the material's current state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["needs_review"])
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act
        result = await use_case.execute(
            CreateCommentRequest(
                user_id=str(uuid4()),
                email="ana@example.org",
                material_id=str(material.id),
                content="Second opinion needed",
            )
        )

        # Assert
        assert result.review_state_id == str(states["needs_review"].id)
        assert result.author_email == "ana@example.org"

    @pytest.mark.asyncio
    async def test_comment_on_unknown_material_raises(self, unit_env):
        """Comments need an existing material."""
        # Arrange
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreateCommentRequest(
                    user_id=str(uuid4()),
                    email="ana@example.org",
                    material_id=str(uuid4()),
                    content="Hello",
                )
            )


class TestCountAndDelete:
    """Tests for CountCommentsUseCase and DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_counts_keyed_by_material_id(self, unit_env):
        """Counts come back as strings keyed by material ID."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        material = add_material(store)
        create = await unit_env.get(CreateCommentUseCase)
        count = await unit_env.get(CountCommentsUseCase)
        await create.execute(
            CreateCommentRequest(
                user_id=str(uuid4()),
                email="ana@example.org",
                material_id=str(material.id),
                content="One",
            )
        )

        # Act
        result = await count.execute(
            CountCommentsRequest(material_ids=[str(material.id)])
        )

        # Assert
        assert result.counts == {str(material.id): 1}

    @pytest.mark.asyncio
    async def test_regular_user_cannot_delete(self, unit_env):
        """Deleting comments needs the admin role."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        material = add_material(store)
        create = await unit_env.get(CreateCommentUseCase)
        delete = await unit_env.get(DeleteCommentUseCase)
        user_id = str(uuid4())
        comment = await create.execute(
            CreateCommentRequest(
                user_id=user_id,
                email="ana@example.org",
                material_id=str(material.id),
                content="Mine",
            )
        )

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await delete.execute(
                DeleteCommentRequest(
                    user_id=user_id, email="ana@example.org", comment_id=comment.id
                )
            )

    @pytest.mark.asyncio
    async def test_admin_deletes_comment(self, unit_env):
        """Admins can delete any comment."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        admin = add_profile(store, "lead@example.org", UserRole.ADMIN)
        material = add_material(store)
        create = await unit_env.get(CreateCommentUseCase)
        delete = await unit_env.get(DeleteCommentUseCase)
        comment = await create.execute(
            CreateCommentRequest(
                user_id=str(uuid4()),
                email="ana@example.org",
                material_id=str(material.id),
                content="Spam",
            )
        )

        # Act
        await delete.execute(
            DeleteCommentRequest(
                user_id=str(admin.id), email=admin.email, comment_id=comment.id
            )
        )

        # Assert
        assert store.comments == {}
