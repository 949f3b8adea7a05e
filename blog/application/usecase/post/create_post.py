"""Create post use case."""

from pydantic import BaseModel, Field

from blog.application.usecase.schema import PostResponse
from blog.domain.model.identity import Identity
from blog.domain.service import PostService


class CreatePostRequest(BaseModel):
    """Create post request."""

    identity: Identity
    title: str
    content: str
    categories: list[str] = Field(default_factory=list)
    slug: str | None = None


class CreatePostResponse(PostResponse):
    """Create post response."""


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Args:
            request: Post fields and the resolved author identity

        Returns:
            Created post details

        Raises:
            AuthenticationError: If the caller is anonymous
            ValidationError: If a field is invalid
            ConflictError: If the slug is taken
        """
        post = await self.post_service.create_post(
            request.identity,
            title=request.title,
            content=request.content,
            categories=request.categories,
            slug=request.slug,
        )
        return CreatePostResponse.from_post(post, request.identity)
