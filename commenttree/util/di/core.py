"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from commenttree.config import RetrySettings, Settings
from commenttree.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from the YAML config file, .env and the environment.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_retry_settings(self, settings: Settings) -> RetrySettings:
        """Provide the store retry strategy."""
        return settings.retry_strategy
