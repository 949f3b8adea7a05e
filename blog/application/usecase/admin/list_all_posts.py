"""List posts use case (admin)."""

from blog.application.usecase.post.list_posts import (
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from blog.config import PostSettings
from blog.domain.service import AuthorizationPolicy, PostService


class AdminListPostsUseCase(ListPostsUseCase):
    """Post listing for the admin dashboard.

    Same results as the public listing, but only admins may call it.
    """

    def __init__(
        self,
        post_service: PostService,
        post_settings: PostSettings,
        authorization_policy: AuthorizationPolicy,
    ) -> None:
        """Initialize admin list posts use case.

        Args:
            post_service: Post domain service
            post_settings: Page size defaults and limits
            authorization_policy: Admin check
        """
        super().__init__(post_service=post_service, post_settings=post_settings)
        self.authorization_policy = authorization_policy

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute admin list posts flow.

        Raises:
            NotAuthorizedError: If the caller is not an admin
        """
        self.authorization_policy.require_admin(request.identity, "posts")
        return await super().execute(request)
