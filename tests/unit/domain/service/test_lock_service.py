"""Unit tests for SoftLockCoordinator."""

from uuid import uuid4

import pytest

from desk.domain.service import PresenceChannel, PresenceRegistry, SoftLockCoordinator
from desk.domain.value import Editor, MaterialId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ANA = Editor(identity="ana@example.org", key="key-a")
BEN = Editor(identity="ben@example.org", key="key-b")


class TestCanOpen:
    """Tests for can_open."""

    @pytest.mark.asyncio
    async def test_free_material_can_be_opened(self, unit_env):
        """Nobody tracking the material means it is free."""
        # Arrange
        coordinator = await unit_env.get(SoftLockCoordinator)

        # Act
        result = await coordinator.can_open(MaterialId(uuid4()), ANA)

        # Assert
        assert result is True

    @pytest.mark.asyncio
    async def test_material_held_by_other_editor_is_refused(self, unit_env):
        """Another editor's lock blocks the workflow."""
        # Arrange
        coordinator = await unit_env.get(SoftLockCoordinator)
        material_id = MaterialId(uuid4())
        await coordinator.acquire(material_id, BEN)

        # Act
        result = await coordinator.can_open(material_id, ANA)

        # Assert
        assert result is False
        holder = await coordinator.holder(material_id)
        assert holder.editor == BEN.identity

    @pytest.mark.asyncio
    async def test_own_lock_from_another_tab_is_allowed(self, unit_env):
        """An editor can re-open a material held under another key."""
        # Arrange
        coordinator = await unit_env.get(SoftLockCoordinator)
        material_id = MaterialId(uuid4())
        await coordinator.acquire(material_id, ANA)
        other_tab = Editor(identity=ANA.identity, key="key-a2")

        # Act
        result = await coordinator.can_open(material_id, other_tab)

        # Assert
        assert result is True

    @pytest.mark.asyncio
    async def test_fails_open_when_presence_down(self, unit_env):
        """A presence outage never blocks reviewers."""
        # Arrange
        coordinator = await unit_env.get(SoftLockCoordinator)
        channel = await unit_env.get(PresenceChannel)
        material_id = MaterialId(uuid4())
        await coordinator.acquire(material_id, BEN)
        channel.disconnect()

        # Act
        result = await coordinator.can_open(material_id, ANA)

        # Assert
        assert result is True
        assert await coordinator.holder(material_id) is None


class TestAcquireRelease:
    """Tests for acquire and release."""

    @pytest.mark.asyncio
    async def test_release_frees_material(self, unit_env):
        """Releasing the key frees the material for others."""
        # Arrange
        coordinator = await unit_env.get(SoftLockCoordinator)
        material_id = MaterialId(uuid4())
        await coordinator.acquire(material_id, BEN)

        # Act
        await coordinator.release(BEN.key)

        # Assert
        assert await coordinator.can_open(material_id, ANA) is True

    @pytest.mark.asyncio
    async def test_acquire_and_release_tolerate_outage(self, unit_env):
        """Lock calls log and carry on while presence is down."""
        # Arrange
        coordinator = await unit_env.get(SoftLockCoordinator)
        registry = await unit_env.get(PresenceRegistry)
        channel = await unit_env.get(PresenceChannel)
        channel.disconnect()

        # Act
        lock = await coordinator.acquire(MaterialId(uuid4()), ANA)
        await coordinator.release(ANA.key)

        # Assert
        assert lock is None
        assert registry.connected is False
