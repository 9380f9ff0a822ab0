"""Unit tests for PresenceRegistry."""

from datetime import timedelta
from uuid import uuid4

import pytest

from desk.adapter.presence import LocalPresenceChannel
from desk.domain.error import PresenceUnavailableError
from desk.domain.model.common import utcnow
from desk.domain.model.session import Lock
from desk.domain.service import PresenceRegistry
from desk.domain.service.presence_service import (
    PresenceChannel,
    lock_to_payload,
    locks_from_snapshot,
)
from desk.domain.value import Editor, MaterialId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _lock(material_id: MaterialId, editor: str, key: str, seconds_ago: int) -> Lock:
    return Lock(
        material_id=material_id,
        editor=editor,
        editor_key=key,
        locked_at=utcnow() - timedelta(seconds=seconds_ago),
    )


class TestJoinAndLeave:
    """Tests for join and leave."""

    @pytest.mark.asyncio
    async def test_join_publishes_lock(self, unit_env):
        """Joining should make the material show up as locked."""
        # Arrange
        registry = await unit_env.get(PresenceRegistry)
        material_id = MaterialId(uuid4())
        editor = Editor(identity="ana@example.org", key="key-a")

        # Act
        lock = await registry.join(editor, material_id)
        locks = await registry.snapshot()

        # Assert
        assert lock.editor == "ana@example.org"
        assert locks[material_id].editor == "ana@example.org"
        assert locks[material_id].editor_key == "key-a"

    @pytest.mark.asyncio
    async def test_join_again_moves_key_to_new_material(self, unit_env):
        """A key tracks at most one material."""
        # Arrange
        registry = await unit_env.get(PresenceRegistry)
        first = MaterialId(uuid4())
        second = MaterialId(uuid4())
        editor = Editor(identity="ana@example.org", key="key-a")
        await registry.join(editor, first)

        # Act
        await registry.join(editor, second)
        locks = await registry.snapshot()

        # Assert
        assert first not in locks
        assert second in locks

    @pytest.mark.asyncio
    async def test_leave_removes_lock(self, unit_env):
        """Leaving should free the material."""
        # Arrange
        registry = await unit_env.get(PresenceRegistry)
        material_id = MaterialId(uuid4())
        await registry.join(Editor(identity="ana@example.org", key="key-a"), material_id)

        # Act
        await registry.leave("key-a")

        # Assert
        assert await registry.snapshot() == {}

    @pytest.mark.asyncio
    async def test_leave_unknown_key_is_ignored(self, unit_env):
        """Leaving with a key that tracks nothing should not fail."""
        # Arrange
        registry = await unit_env.get(PresenceRegistry)

        # Act
        await registry.leave("never-joined")

        # Assert
        assert await registry.snapshot() == {}

    @pytest.mark.asyncio
    async def test_join_raises_when_disconnected(self, unit_env):
        """Registry calls surface channel outages."""
        # Arrange
        registry = await unit_env.get(PresenceRegistry)
        channel = await unit_env.get(PresenceChannel)
        channel.disconnect()

        # Act & Assert
        assert registry.connected is False
        with pytest.raises(PresenceUnavailableError):
            await registry.join(
                Editor(identity="ana@example.org", key="key-a"), MaterialId(uuid4())
            )


class TestConnection:
    """Tests for connection-scoped membership."""

    @pytest.mark.asyncio
    async def test_connection_exit_leaves(self, unit_env):
        """Closing a connection should drop its lock."""
        # Arrange
        registry = await unit_env.get(PresenceRegistry)
        material_id = MaterialId(uuid4())

        # Act
        async with registry.connection("key-a"):
            await registry.join(
                Editor(identity="ana@example.org", key="key-a"), material_id
            )
            during = await registry.snapshot()
        after = await registry.snapshot()

        # Assert
        assert material_id in during
        assert after == {}

    @pytest.mark.asyncio
    async def test_connection_exit_leaves_on_error(self, unit_env):
        """A connection dropped by an error still leaves."""
        # Arrange
        registry = await unit_env.get(PresenceRegistry)
        material_id = MaterialId(uuid4())

        # Act
        with pytest.raises(RuntimeError):
            async with registry.connection("key-a"):
                await registry.join(
                    Editor(identity="ana@example.org", key="key-a"), material_id
                )
                raise RuntimeError("socket closed")

        # Assert
        assert await registry.snapshot() == {}

    @pytest.mark.asyncio
    async def test_connection_exit_tolerates_outage(self, unit_env):
        """Auto-leave during an outage should not raise."""
        # Arrange
        registry = await unit_env.get(PresenceRegistry)
        channel = await unit_env.get(PresenceChannel)

        # Act
        async with registry.connection("key-a"):
            channel.disconnect()

        # Assert
        assert registry.connected is False

    @pytest.mark.asyncio
    async def test_key_owner_lasts_while_connection_open(self, unit_env):
        """A key is attributed to its editor until the connection closes."""
        # Arrange
        registry = await unit_env.get(PresenceRegistry)

        # Act
        async with registry.connection("key-a", owner="ana@example.org"):
            during = registry.key_owner("key-a")
        after = registry.key_owner("key-a")

        # Assert
        assert during == "ana@example.org"
        assert after is None
        assert registry.key_owner("never-issued") is None


class TestOnChange:
    """Tests for lock subscriptions."""

    @pytest.mark.asyncio
    async def test_subscriber_receives_locks_after_each_change(self, unit_env):
        """Subscribers get the full lock map after join and leave."""
        # Arrange
        registry = await unit_env.get(PresenceRegistry)
        material_id = MaterialId(uuid4())
        received = []
        unsubscribe = registry.on_change(received.append)

        # Act
        await registry.join(Editor(identity="ana@example.org", key="key-a"), material_id)
        await registry.leave("key-a")
        unsubscribe()
        await registry.join(Editor(identity="ana@example.org", key="key-a"), material_id)

        # Assert
        assert len(received) == 2
        assert material_id in received[0]
        assert received[1] == {}


class TestLocksFromSnapshot:
    """Tests for reducing memberships to locks."""

    def test_earliest_join_wins(self):
        """Two keys on one material resolve to the earliest join."""
        # Arrange
        material_id = MaterialId(uuid4())
        early = _lock(material_id, "ana@example.org", "key-a", seconds_ago=30)
        late = _lock(material_id, "ben@example.org", "key-b", seconds_ago=5)
        state = {
            "key-b": lock_to_payload(late),
            "key-a": lock_to_payload(early),
        }

        # Act
        locks = locks_from_snapshot(state)

        # Assert
        assert locks[material_id].editor == "ana@example.org"

    def test_malformed_payload_is_skipped(self):
        """Payloads that do not describe a lock are ignored."""
        # Arrange
        material_id = MaterialId(uuid4())
        lock = _lock(material_id, "ana@example.org", "key-a", seconds_ago=1)
        state = {"key-a": lock_to_payload(lock), "key-x": {"cursor": 12}}

        # Act
        locks = locks_from_snapshot(state)

        # Assert
        assert list(locks) == [material_id]

    def test_payload_does_not_carry_key(self):
        """The presence key is the member key, not part of the payload."""
        # Arrange
        lock = _lock(MaterialId(uuid4()), "ana@example.org", "key-a", seconds_ago=1)

        # Act
        payload = lock_to_payload(lock)

        # Assert
        assert "editor_key" not in payload
        assert payload["editor"] == "ana@example.org"


class TestLocalPresenceChannel:
    """Tests for the in-process channel."""

    @pytest.mark.asyncio
    async def test_state_is_a_copy(self):
        """Callers cannot mutate the hub through a snapshot."""
        # Arrange
        channel = LocalPresenceChannel()
        await channel.join("topic", "key-a", {"n": 1})

        # Act
        state = await channel.state("topic")
        state["key-a"]["n"] = 2

        # Assert
        assert (await channel.state("topic"))["key-a"]["n"] == 1

    @pytest.mark.asyncio
    async def test_topics_are_isolated(self):
        """Members of one topic are invisible in another."""
        # Arrange
        channel = LocalPresenceChannel()

        # Act
        await channel.join("locks", "key-a", {"n": 1})

        # Assert
        assert await channel.state("other") == {}

    @pytest.mark.asyncio
    async def test_reconnect_keeps_memberships(self):
        """An outage does not lose members."""
        # Arrange
        channel = LocalPresenceChannel()
        await channel.join("topic", "key-a", {"n": 1})

        # Act
        channel.disconnect()
        with pytest.raises(PresenceUnavailableError):
            await channel.state("topic")
        channel.reconnect()

        # Assert
        assert "key-a" in await channel.state("topic")
