"""Unit tests for MaterialService."""

from uuid import uuid4

import pytest

from desk.domain.error import NotFoundError, ValidationError
from desk.domain.model.material import MaterialFilter
from desk.domain.service import MaterialService
from desk.domain.value import ExpectedCategory, MaterialFormat, MaterialId
from desk.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import add_material, seed_review_states
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateAndUpdate:
    """Tests for create_material and update_material."""

    @pytest.mark.asyncio
    async def test_create_material_trims_url(self, unit_env):
        """The URL is stored trimmed with the given state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        service = await unit_env.get(MaterialService)

        # Act
        material = await service.create_material(
            url="  https://example.org/clip  ",
            format=MaterialFormat.VIDEO,
            expected_category=ExpectedCategory.AI_GENERATED,
            created_by=None,
            review_state_id=states["pending"].id,
        )

        # Assert
        assert material.url == "https://example.org/clip"
        assert material.review_state_id == states["pending"].id
        assert store.materials[material.id] == material

    @pytest.mark.asyncio
    async def test_create_material_blank_url_rejected(self, unit_env):
        """A blank URL is a validation error."""
        # Arrange
        service = await unit_env.get(MaterialService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.create_material(
                url="   ",
                format=MaterialFormat.TEXT,
                expected_category=ExpectedCategory.TEXTUAL_DISINFORMATION,
                created_by=None,
            )

    @pytest.mark.asyncio
    async def test_update_material_changes_fields(self, unit_env):
        """Descriptive fields can be edited and cleared."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        material = add_material(store, source="Channel A")
        service = await unit_env.get(MaterialService)

        # Act
        updated = await service.update_material(
            material.id, description="Edited clip", source=None
        )

        # Assert
        assert updated.description == "Edited clip"
        assert updated.source is None
        assert updated.updated_at >= material.updated_at

    @pytest.mark.asyncio
    async def test_update_material_rejects_review_state(self, unit_env):
        """The review state only moves through the workflow."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        material = add_material(store, states["pending"])
        service = await unit_env.get(MaterialService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.update_material(
                material.id, review_state_id=states["analyzed"].id
            )

    @pytest.mark.asyncio
    async def test_update_unknown_material_raises(self, unit_env):
        """Editing a missing material is not found."""
        # Arrange
        service = await unit_env.get(MaterialService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.update_material(MaterialId(uuid4()), description="x")


class TestListAndStats:
    """Tests for listing and statistics."""

    @pytest.mark.asyncio
    async def test_list_materials_filters_by_state_and_search(self, unit_env):
        """Filters combine with AND."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        match = add_material(
            store, states["analyzed"], description="Flood photo, reused"
        )
        add_material(store, states["pending"], description="Flood photo")
        add_material(store, states["analyzed"], description="Speech transcript")
        service = await unit_env.get(MaterialService)

        # Act
        result = await service.list_materials(
            MaterialFilter(review_state_id=states["analyzed"].id, search="FLOOD")
        )

        # Assert
        assert [m.id for m in result] == [match.id]

    @pytest.mark.asyncio
    async def test_get_stats_counts_by_state(self, unit_env):
        """Stats group materials by category, format and state."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        states = seed_review_states(store)
        add_material(store, states["analyzed"])
        add_material(store, states["analyzed"], format=MaterialFormat.VIDEO)
        add_material(store, None)
        service = await unit_env.get(MaterialService)

        # Act
        stats = await service.get_stats(list(store.review_states.values()))

        # Assert
        assert stats.total == 3
        assert stats.by_format == {"image": 2, "video": 1}
        assert stats.by_category == {"deepfake": 3}
        counts = {s.name: s.count for s in stats.by_state}
        assert counts["Analyzed"] == 2
        assert sum(counts.values()) == 3


class TestDelete:
    """Tests for delete_material."""

    @pytest.mark.asyncio
    async def test_delete_material_cascades(self, unit_env):
        """Comments and tag links go with the material."""
        # Arrange
        store = await unit_env.get(InMemoryDatabase)
        material = add_material(store)
        service = await unit_env.get(MaterialService)

        # Act
        await service.delete_material(material.id)

        # Assert
        assert store.materials == {}
        with pytest.raises(NotFoundError):
            await service.get_material(material.id)
