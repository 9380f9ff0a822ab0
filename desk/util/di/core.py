"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from desk.config import AuthSettings, PresenceSettings, Settings
from desk.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_presence_settings(self, settings: Settings) -> PresenceSettings:
        """Provide presence settings."""
        return settings.presence
