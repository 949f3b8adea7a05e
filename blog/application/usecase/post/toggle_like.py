"""Toggle like use case."""

from uuid import UUID

from pydantic import BaseModel

from blog.domain.model.identity import Identity
from blog.domain.service import PostService
from blog.domain.value import PostId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    post_id: str  # UUID string
    identity: Identity


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    like_count: int
    liked: bool


class ToggleLikeUseCase:
    """Use case for liking or unliking a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize toggle like use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the identity has no account to like with
        """
        result = await self.post_service.toggle_like(
            request.identity, PostId(UUID(request.post_id))
        )
        return ToggleLikeResponse(like_count=result.like_count, liked=result.liked)
