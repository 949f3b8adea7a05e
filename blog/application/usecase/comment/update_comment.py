"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from blog.application.usecase.schema import CommentResponse
from blog.domain.model.identity import Identity
from blog.domain.service import PostService
from blog.domain.value import CommentId, PostId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    post_id: str  # UUID string
    comment_id: str  # UUID string
    identity: Identity  # Must be the comment author or an admin
    content: str


class UpdateCommentResponse(CommentResponse):
    """Update comment response."""

    post_id: str


class UpdateCommentUseCase:
    """Use case for editing a comment's content."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize update comment use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the post or comment doesn't exist
            NotAuthorizedError: If the caller may not edit the comment
            ValidationError: If the new content is empty
        """
        comment = await self.post_service.edit_comment(
            request.identity,
            PostId(UUID(request.post_id)),
            CommentId(UUID(request.comment_id)),
            request.content,
        )
        return UpdateCommentResponse(
            post_id=request.post_id,
            **CommentResponse.from_comment(comment).model_dump(),
        )
