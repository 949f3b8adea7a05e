"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from blog.config import AuthSettings, PostSettings, Settings, ViewSettings
from blog.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

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
    def provide_post_settings(self, settings: Settings) -> PostSettings:
        """Provide post validation and paging settings."""
        return settings.posts

    @provide(scope=Scope.APP)
    def provide_view_settings(self, settings: Settings) -> ViewSettings:
        """Provide view dedup settings."""
        return settings.views
