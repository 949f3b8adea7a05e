"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.model.identity import Identity
from blog.domain.service import PostService
from blog.domain.value import CommentId, PostId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    post_id: str  # UUID string
    comment_id: str  # UUID string
    identity: Identity


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    post_id: str
    comment_id: str
    deleted: bool = True


class DeleteCommentUseCase(BaseUseCase[DeleteCommentRequest, DeleteCommentResponse]):
    """Use case for removing one comment from a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize delete comment use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the post or comment doesn't exist
            NotAuthorizedError: If the caller may not delete the comment
        """
        await self.post_service.delete_comment(
            request.identity,
            PostId(UUID(request.post_id)),
            CommentId(UUID(request.comment_id)),
        )
        return DeleteCommentResponse(
            post_id=request.post_id, comment_id=request.comment_id
        )
