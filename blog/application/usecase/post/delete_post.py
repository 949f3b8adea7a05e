"""Delete post use case."""

from uuid import UUID

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.model.identity import Identity
from blog.domain.service import PostService
from blog.domain.value import PostId


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str  # UUID string
    identity: Identity


class DeletePostResponse(BaseModel):
    """Delete post response."""

    post_id: str
    deleted: bool = True


class DeletePostUseCase(BaseUseCase[DeletePostRequest, DeletePostResponse]):
    """Use case for deleting a post with its comments and likes."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the caller may not delete the post
        """
        await self.post_service.delete_post(
            request.identity, PostId(UUID(request.post_id))
        )
        return DeletePostResponse(post_id=request.post_id)
