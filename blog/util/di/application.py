"""Application layer DI providers."""

from dishka import Scope, provide

from blog.application.usecase.admin import (
    AdminDeletePostUseCase,
    AdminDeleteUserUseCase,
    AdminListPostsUseCase,
    ListUsersUseCase,
)
from blog.application.usecase.auth import ResolveIdentityUseCase
from blog.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    UpdateCommentUseCase,
)
from blog.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    RecordViewUseCase,
    ToggleLikeUseCase,
    UpdatePostUseCase,
)
from blog.application.usecase.user import (
    GetUserProfileUseCase,
    UpdateUserProfileUseCase,
)
from blog.config import PostSettings
from blog.domain.service import (
    AuthorizationPolicy,
    IdentityService,
    PostService,
    UserService,
)
from blog.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_resolve_identity_use_case(
        self, identity_service: IdentityService
    ) -> ResolveIdentityUseCase:
        """Provide resolve identity use case."""
        return ResolveIdentityUseCase(identity_service=identity_service)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(self, post_service: PostService) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, post_service: PostService, post_settings: PostSettings
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service, post_settings=post_settings)

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(self, post_service: PostService) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(self, post_service: PostService) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_record_view_use_case(self, post_service: PostService) -> RecordViewUseCase:
        """Provide record view use case."""
        return RecordViewUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, post_service: PostService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, post_service: PostService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, post_service: PostService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(post_service=post_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_profile_use_case(
        self, user_service: UserService, post_service: PostService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(
            user_service=user_service, post_service=post_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_user_profile_use_case(
        self, user_service: UserService
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(user_service=user_service)

    # Admin use cases
    @provide(scope=Scope.REQUEST)
    def get_list_users_use_case(
        self, user_service: UserService, authorization_policy: AuthorizationPolicy
    ) -> ListUsersUseCase:
        """Provide admin list users use case."""
        return ListUsersUseCase(
            user_service=user_service, authorization_policy=authorization_policy
        )

    @provide(scope=Scope.REQUEST)
    def get_admin_list_posts_use_case(
        self,
        post_service: PostService,
        post_settings: PostSettings,
        authorization_policy: AuthorizationPolicy,
    ) -> AdminListPostsUseCase:
        """Provide admin list posts use case."""
        return AdminListPostsUseCase(
            post_service=post_service,
            post_settings=post_settings,
            authorization_policy=authorization_policy,
        )

    @provide(scope=Scope.REQUEST)
    def get_admin_delete_post_use_case(
        self, post_service: PostService, authorization_policy: AuthorizationPolicy
    ) -> AdminDeletePostUseCase:
        """Provide admin delete post use case."""
        return AdminDeletePostUseCase(
            post_service=post_service, authorization_policy=authorization_policy
        )

    @provide(scope=Scope.REQUEST)
    def get_admin_delete_user_use_case(
        self, user_service: UserService, authorization_policy: AuthorizationPolicy
    ) -> AdminDeleteUserUseCase:
        """Provide admin delete user use case."""
        return AdminDeleteUserUseCase(
            user_service=user_service, authorization_policy=authorization_policy
        )
