"""Presence infrastructure providers."""

from dishka import Scope, provide

from desk.adapter.presence import LocalPresenceChannel
from desk.adapter.session import LocalReviewSessionStore
from desk.config import PresenceSettings
from desk.domain.repository import ReviewSessionRepository
from desk.domain.service import (
    PresenceChannel,
    PresenceRegistry,
    SoftLockCoordinator,
)
from desk.util.di.base import ProviderBase


class PresenceProvider(ProviderBase):
    """Presence provider - concrete, process-wide.

    Presence members and open review sessions are ephemeral and shared by
    every request and WebSocket of the process, so all of it is APP-scoped.
    """

    scope = Scope.APP

    @provide
    def get_presence_channel(self) -> PresenceChannel:
        """Provide the in-process presence channel."""
        return LocalPresenceChannel()

    @provide
    def get_presence_registry(
        self, channel: PresenceChannel, presence_settings: PresenceSettings
    ) -> PresenceRegistry:
        """Provide the presence registry on the lock topic."""
        return PresenceRegistry(channel=channel, topic=presence_settings.topic)

    @provide
    def get_lock_coordinator(
        self, presence_registry: PresenceRegistry
    ) -> SoftLockCoordinator:
        """Provide the soft-lock coordinator."""
        return SoftLockCoordinator(presence_registry=presence_registry)

    @provide
    def get_session_repository(self) -> ReviewSessionRepository:
        """Provide the in-memory review session store."""
        return LocalReviewSessionStore()
