"""Presence registry: who is editing which material.

Membership lives in a publish/subscribe presence channel, not in the
database. Every member of a topic is keyed by its connection, and a
connection that goes away leaves the topic on its own.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import logfire
from pydantic import ValidationError as PydanticValidationError

from desk.domain.error import PresenceUnavailableError
from desk.domain.model.common import utcnow
from desk.domain.model.session import Lock
from desk.domain.value import Editor, MaterialId

from .base import Service

# Membership of one topic: presence key -> payload
Snapshot = dict[str, dict[str, Any]]
SnapshotCallback = Callable[[Snapshot], None]
Unsubscribe = Callable[[], None]

DEFAULT_LOCK_TOPIC = "material-locks"


class PresenceChannel(ABC):
    """Publish/subscribe membership channel.

    Guarantees ordering per key only. Snapshots seen by subscribers are
    eventually consistent across keys.
    """

    @property
    @abstractmethod
    def connected(self) -> bool:
        """Whether the channel can currently be reached."""
        pass

    @abstractmethod
    async def join(self, topic: str, key: str, payload: dict[str, Any]) -> None:
        """Add or replace a key's membership in a topic.

        Args:
            topic: Topic name
            key: Presence key of the member
            payload: Member payload broadcast to subscribers

        Raises:
            PresenceUnavailableError: If the channel is disconnected
        """
        pass

    @abstractmethod
    async def leave(self, topic: str, key: str) -> None:
        """Remove a key from a topic. Unknown keys are ignored.

        Raises:
            PresenceUnavailableError: If the channel is disconnected
        """
        pass

    @abstractmethod
    async def state(self, topic: str) -> Snapshot:
        """Get the current membership of a topic.

        Raises:
            PresenceUnavailableError: If the channel is disconnected
        """
        pass

    @abstractmethod
    def on_snapshot(self, topic: str, callback: SnapshotCallback) -> Unsubscribe:
        """Register a callback receiving the full membership after each change.

        Args:
            topic: Topic name
            callback: Called with a fresh snapshot copy

        Returns:
            Function that removes the callback
        """
        pass

    def connect(self, topic: str, key: str) -> "PresenceConnection":
        """Open a membership handle for one client connection."""
        return PresenceConnection(self, topic, key)


class PresenceConnection:
    """Membership of one client connection.

    Used as an async context manager. Exiting the context, for any reason,
    removes the connection's membership and runs the close callbacks.
    """

    def __init__(self, channel: PresenceChannel, topic: str, key: str) -> None:
        self.channel = channel
        self.topic = topic
        self.key = key
        self._close_callbacks: list[Callable[[], None]] = []

    def on_close(self, callback: Callable[[], None]) -> None:
        """Register a callback run when the connection closes."""
        self._close_callbacks.append(callback)

    async def track(self, payload: dict[str, Any]) -> None:
        """Publish this connection's payload."""
        await self.channel.join(self.topic, self.key, payload)

    async def untrack(self) -> None:
        """Withdraw this connection's payload."""
        await self.channel.leave(self.topic, self.key)

    async def __aenter__(self) -> "PresenceConnection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await self.channel.leave(self.topic, self.key)
            logfire.info(
                "Presence auto-leave on disconnect", topic=self.topic, key=self.key
            )
        except PresenceUnavailableError as e:
            logfire.warn(
                "Presence channel unavailable during auto-leave",
                topic=self.topic,
                key=self.key,
                error=str(e),
            )
        finally:
            for callback in self._close_callbacks:
                callback()


class PresenceRegistry(Service):
    """Domain service tracking which editor holds which material."""

    def __init__(
        self, channel: PresenceChannel, topic: str = DEFAULT_LOCK_TOPIC
    ) -> None:
        """Initialize presence registry.

        Args:
            channel: Presence channel carrying the locks
            topic: Topic used for material locks
        """
        self.channel = channel
        self.topic = topic
        # Presence key -> editor identity it was issued to
        self._key_owners: dict[str, str] = {}

    @property
    def connected(self) -> bool:
        """Whether the underlying channel is reachable."""
        return self.channel.connected

    async def join(self, editor: Editor, material_id: MaterialId) -> Lock:
        """Publish that an editor is tracking a material.

        A presence key tracks at most one material, so joining again moves
        the key to the new material.

        Args:
            editor: Editor and the presence key it works from
            material_id: Material being edited

        Returns:
            The published lock

        Raises:
            PresenceUnavailableError: If the channel is disconnected
        """
        with logfire.span(
            "presence_registry.join",
            editor=editor.identity,
            key=editor.key,
            material_id=str(material_id),
        ):
            lock = Lock(
                material_id=material_id,
                editor=editor.identity,
                editor_key=editor.key,
                locked_at=utcnow(),
            )
            await self.channel.join(self.topic, editor.key, lock_to_payload(lock))
            logfire.info(
                "Editor joined material",
                editor=editor.identity,
                material_id=str(material_id),
            )
            return lock

    async def leave(self, editor_key: str) -> None:
        """Publish that a presence key tracks nothing.

        Raises:
            PresenceUnavailableError: If the channel is disconnected
        """
        with logfire.span("presence_registry.leave", key=editor_key):
            await self.channel.leave(self.topic, editor_key)
            logfire.info("Editor left", key=editor_key)

    async def snapshot(self) -> dict[MaterialId, Lock]:
        """Get one lock per tracked material.

        Raises:
            PresenceUnavailableError: If the channel is disconnected
        """
        state = await self.channel.state(self.topic)
        return locks_from_snapshot(state)

    def connection(self, key: str, owner: Optional[str] = None) -> PresenceConnection:
        """Open a membership handle that leaves on disconnect.

        Args:
            key: Presence key of the client connection
            owner: Editor identity the key is issued to, kept until the
                handle closes
        """
        connection = self.channel.connect(self.topic, key)
        if owner is not None:
            self._key_owners[key] = owner
            connection.on_close(lambda: self._key_owners.pop(key, None))
        return connection

    def key_owner(self, key: str) -> Optional[str]:
        """Editor identity a presence key was issued to.

        Returns:
            The identity, None for unknown or closed keys
        """
        return self._key_owners.get(key)

    def on_change(
        self, callback: Callable[[dict[MaterialId, Lock]], None]
    ) -> Unsubscribe:
        """Subscribe to lock snapshots.

        Args:
            callback: Called with the lock map after each membership change

        Returns:
            Function that removes the subscription
        """
        return self.channel.on_snapshot(
            self.topic, lambda state: callback(locks_from_snapshot(state))
        )


def lock_to_payload(lock: Lock) -> dict[str, Any]:
    """Convert a lock to the payload published on the channel."""
    return lock.model_dump(mode="json", exclude={"editor_key"})


def payload_to_lock(key: str, payload: dict[str, Any]) -> Optional[Lock]:
    """Convert a channel payload back to a lock.

    Returns:
        The lock, None when the payload does not describe one
    """
    try:
        return Lock.model_validate({**payload, "editor_key": key})
    except PydanticValidationError:
        logfire.warn("Ignoring malformed presence payload", key=key)
        return None


def locks_from_snapshot(state: Snapshot) -> dict[MaterialId, Lock]:
    """Reduce a membership snapshot to one lock per material.

    When several keys track the same material, the earliest join wins,
    with the presence key as tie-breaker.
    """
    locks: dict[MaterialId, Lock] = {}
    for key, payload in state.items():
        lock = payload_to_lock(key, payload)
        if lock is None:
            continue
        current = locks.get(lock.material_id)
        if current is None or (lock.locked_at, lock.editor_key) < (
            current.locked_at,
            current.editor_key,
        ):
            locks[lock.material_id] = lock
    return locks
