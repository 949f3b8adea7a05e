"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel

from blog.application.usecase.schema import CommentResponse
from blog.domain.model.identity import Identity
from blog.domain.service import PostService
from blog.domain.value import PostId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    identity: Identity
    content: str


class CreateCommentResponse(CommentResponse):
    """Create comment response."""

    post_id: str


class CreateCommentUseCase:
    """Use case for appending a comment to a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create comment use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Raises:
            AuthenticationError: If the caller is anonymous
            ValidationError: If the content is empty
            NotFoundError: If the post doesn't exist
        """
        comment = await self.post_service.add_comment(
            request.identity, PostId(UUID(request.post_id)), request.content
        )
        return CreateCommentResponse(
            post_id=request.post_id,
            **CommentResponse.from_comment(comment).model_dump(),
        )
