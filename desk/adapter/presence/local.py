"""In-process presence channel.

A hub holding topic memberships in memory and pushing a fresh snapshot to
every subscriber after each change. Subscribers registered from another
event loop (for example a WebSocket served on its own loop) are fed through
that loop's thread-safe scheduler.
"""

import asyncio
import threading
from collections import defaultdict
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Optional

import logfire

from desk.domain.error import PresenceUnavailableError
from desk.domain.service.presence_service import (
    PresenceChannel,
    Snapshot,
    SnapshotCallback,
    Unsubscribe,
)


@dataclass(eq=False)
class _Subscriber:
    callback: SnapshotCallback
    loop: Optional[asyncio.AbstractEventLoop]


class LocalPresenceChannel(PresenceChannel):
    """Presence channel shared by all connections of one process."""

    def __init__(self) -> None:
        """Initialize empty hub."""
        self._members: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self._subscribers: dict[str, list[_Subscriber]] = defaultdict(list)
        self._connected = True
        self._guard = threading.Lock()

    @property
    def connected(self) -> bool:
        return self._connected

    def disconnect(self) -> None:
        """Take the channel offline. Memberships are kept."""
        self._connected = False
        logfire.warn("Presence channel disconnected")

    def reconnect(self) -> None:
        """Bring the channel back online."""
        self._connected = True
        logfire.info("Presence channel reconnected")

    async def join(self, topic: str, key: str, payload: dict[str, Any]) -> None:
        self._ensure_connected()
        with self._guard:
            self._members[topic][key] = deepcopy(payload)
            snapshot = deepcopy(self._members[topic])
        self._publish(topic, snapshot)

    async def leave(self, topic: str, key: str) -> None:
        self._ensure_connected()
        with self._guard:
            removed = self._members[topic].pop(key, None)
            snapshot = deepcopy(self._members[topic])
        if removed is not None:
            self._publish(topic, snapshot)

    async def state(self, topic: str) -> Snapshot:
        self._ensure_connected()
        with self._guard:
            return deepcopy(self._members[topic])

    def on_snapshot(self, topic: str, callback: SnapshotCallback) -> Unsubscribe:
        try:
            loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        subscriber = _Subscriber(callback=callback, loop=loop)
        with self._guard:
            self._subscribers[topic].append(subscriber)

        def unsubscribe() -> None:
            with self._guard:
                if subscriber in self._subscribers[topic]:
                    self._subscribers[topic].remove(subscriber)

        return unsubscribe

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise PresenceUnavailableError("Presence channel is disconnected")

    def _publish(self, topic: str, snapshot: Snapshot) -> None:
        with self._guard:
            subscribers = list(self._subscribers[topic])

        try:
            current_loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        for subscriber in subscribers:
            message = deepcopy(snapshot)
            try:
                if subscriber.loop is not None and subscriber.loop is not current_loop:
                    subscriber.loop.call_soon_threadsafe(subscriber.callback, message)
                else:
                    subscriber.callback(message)
            except RuntimeError as e:
                # Subscriber's event loop is closed
                logfire.warn("Dropping presence subscriber", topic=topic, error=str(e))
                with self._guard:
                    if subscriber in self._subscribers[topic]:
                        self._subscribers[topic].remove(subscriber)
