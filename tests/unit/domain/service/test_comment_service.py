"""Unit tests for CommentService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from desk.domain.error import NotFoundError, ValidationError
from desk.domain.model.comment import Comment
from desk.domain.model.common import utcnow
from desk.domain.model.profile import CurrentUser
from desk.domain.service import CommentService
from desk.domain.value import MAX_COMMENT_LENGTH, CommentId, MaterialId, UserId
from desk.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import add_material, seed_review_states
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

AUTHOR = CurrentUser(id=UserId(uuid4()), email="ana@example.org")


def _stored_comment(
    store: InMemoryDatabase, material_id: MaterialId, content: str, minutes_ago: int
) -> Comment:
    comment = Comment(
        id=CommentId(uuid4()),
        material_id=material_id,
        author_id=AUTHOR.id,
        content=content,
        created_at=utcnow() - timedelta(minutes=minutes_ago),
    )
    store.comments[comment.id] = comment
    return comment


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_comment_trims_and_stamps_state(self, unit_env):
        """Comment text is trimmed and the state snapshot stored."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        service = await unit_env.get(CommentService)

        # Act
        comment = await service.create_comment(
            material.id,
            AUTHOR,
            "  Reverse image search finds 2019 original ",
            states["pending"].id,
        )

        # Assert
        assert comment.content == "Reverse image search finds 2019 original"
        assert comment.author_email == "ana@example.org"
        assert comment.review_state_id == states["pending"].id
        assert store.comments[comment.id] == comment

    @pytest.mark.asyncio
    async def test_create_comment_empty_rejected(self, unit_env):
        """Whitespace-only comments are rejected."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.create_comment(MaterialId(uuid4()), AUTHOR, "   ")

    @pytest.mark.asyncio
    async def test_create_comment_at_limit_accepted(self, unit_env):
        """Exactly the maximum length is allowed."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        material = add_material(store)
        service = await unit_env.get(CommentService)

        # Act
        comment = await service.create_comment(
            material.id, AUTHOR, "x" * MAX_COMMENT_LENGTH
        )

        # Assert
        assert len(comment.content) == MAX_COMMENT_LENGTH

    @pytest.mark.asyncio
    async def test_create_comment_over_limit_rejected(self, unit_env):
        """One character over the limit is rejected."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.create_comment(
                MaterialId(uuid4()), AUTHOR, "x" * (MAX_COMMENT_LENGTH + 1)
            )


class TestReadAndDelete:
    """Tests for listing, counting and deleting comments."""

    @pytest.mark.asyncio
    async def test_get_comments_newest_first(self, unit_env):
        """Comments are listed newest first."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        material = add_material(store)
        service = await unit_env.get(CommentService)
        first = _stored_comment(store, material.id, "first", minutes_ago=10)
        second = _stored_comment(store, material.id, "second", minutes_ago=1)

        # Act
        comments = await service.get_comments(material.id)

        # Assert
        assert [c.id for c in comments] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_count_comments_includes_zero(self, unit_env):
        """Materials without comments count as zero."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        busy = add_material(store, url="https://example.org/a")
        quiet = add_material(store, url="https://example.org/b")
        service = await unit_env.get(CommentService)
        await service.create_comment(busy.id, AUTHOR, "one")
        await service.create_comment(busy.id, AUTHOR, "two")

        # Act
        counts = await service.count_comments([busy.id, quiet.id])

        # Assert
        assert counts == {busy.id: 2, quiet.id: 0}

    @pytest.mark.asyncio
    async def test_delete_comment(self, unit_env):
        """Deleted comments disappear."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        material = add_material(store)
        service = await unit_env.get(CommentService)
        comment = await service.create_comment(material.id, AUTHOR, "remove me")

        # Act
        await service.delete_comment(comment.id)

        # Assert
        assert store.comments == {}

    @pytest.mark.asyncio
    async def test_delete_unknown_comment_raises(self, unit_env):
        """Deleting a missing comment is not found."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.delete_comment(CommentId(uuid4()))
