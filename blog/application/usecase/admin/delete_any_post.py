"""Delete post use case (admin)."""

from uuid import UUID

from blog.application.usecase.base import BaseUseCase
from blog.application.usecase.post.delete_post import (
    DeletePostRequest,
    DeletePostResponse,
)
from blog.domain.service import AuthorizationPolicy, PostService
from blog.domain.value import PostId


class AdminDeletePostUseCase(BaseUseCase[DeletePostRequest, DeletePostResponse]):
    """Use case for an admin removing any post."""

    def __init__(
        self, post_service: PostService, authorization_policy: AuthorizationPolicy
    ) -> None:
        """Initialize admin delete post use case.

        Args:
            post_service: Post domain service
            authorization_policy: Admin check
        """
        self.post_service = post_service
        self.authorization_policy = authorization_policy

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute admin delete flow.

        Raises:
            NotAuthorizedError: If the caller is not an admin
            NotFoundError: If the post doesn't exist
        """
        self.authorization_policy.require_admin(request.identity, "posts")
        await self.post_service.delete_post(
            request.identity, PostId(UUID(request.post_id))
        )
        return DeletePostResponse(post_id=request.post_id)
