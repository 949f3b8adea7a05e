"""Domain layer DI providers."""

from dishka import Scope, provide

from blog.config import AuthSettings, PostSettings, ViewSettings
from blog.domain.repository import (
    PostRepository,
    UserRepository,
    ViewHistoryRepository,
)
from blog.domain.service import (
    AuthorizationPolicy,
    IdentityService,
    JWTService,
    PostService,
    UserService,
    ViewDeduplicator,
)
from blog.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_service(
        self,
        user_repository: UserRepository,
        jwt_service: JWTService,
        auth_settings: AuthSettings,
    ) -> IdentityService:
        """Provide identity resolution domain service."""
        return IdentityService(
            user_repository=user_repository,
            jwt_service=jwt_service,
            auth_settings=auth_settings,
        )

    @provide
    def get_authorization_policy(self) -> AuthorizationPolicy:
        """Provide authorization policy."""
        return AuthorizationPolicy()

    @provide
    def get_view_deduplicator(
        self,
        view_history_repository: ViewHistoryRepository,
        view_settings: ViewSettings,
    ) -> ViewDeduplicator:
        """Provide view deduplicator."""
        return ViewDeduplicator(
            view_history_repository=view_history_repository,
            view_settings=view_settings,
        )

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        authorization_policy: AuthorizationPolicy,
        view_deduplicator: ViewDeduplicator,
        post_settings: PostSettings,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            authorization_policy=authorization_policy,
            view_deduplicator=view_deduplicator,
            post_settings=post_settings,
        )

    @provide
    def get_user_service(
        self, user_repository: UserRepository, post_repository: PostRepository
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository, post_repository=post_repository
        )
