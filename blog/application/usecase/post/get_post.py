"""Get post use case."""

from uuid import UUID

from pydantic import BaseModel

from blog.application.usecase.schema import PostResponse
from blog.domain.model.identity import ANONYMOUS, Identity
from blog.domain.service import PostService
from blog.domain.value import PostId


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    identity: Identity = ANONYMOUS  # Viewer, for the "liked" flag


class GetPostResponse(PostResponse):
    """Get post response."""


class GetPostUseCase:
    """Use case for retrieving a post by ID."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post = await self.post_service.get_post(PostId(UUID(request.post_id)))
        return GetPostResponse.from_post(post, request.identity)
