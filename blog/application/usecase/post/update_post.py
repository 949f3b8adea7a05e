"""Update post use case."""

from uuid import UUID

from pydantic import BaseModel

from blog.application.usecase.schema import PostResponse
from blog.domain.model.identity import Identity
from blog.domain.service import PostService
from blog.domain.value import PostId, PostPatch


class UpdatePostRequest(BaseModel):
    """Update post request.

    Fields left as None are not changed. An empty slug clears it.
    """

    post_id: str  # UUID string
    identity: Identity  # Must be the author or an admin
    title: str | None = None
    content: str | None = None
    categories: list[str] | None = None
    slug: str | None = None


class UpdatePostResponse(PostResponse):
    """Update post response."""


class UpdatePostUseCase:
    """Use case for partially updating a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: UpdatePostRequest) -> UpdatePostResponse:
        """Execute update post flow.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the caller may not edit the post
            ValidationError: If a supplied field is invalid
            ConflictError: If the slug is taken
        """
        patch = PostPatch(
            title=request.title,
            content=request.content,
            categories=request.categories,
            slug=request.slug,
        )
        post = await self.post_service.update_post(
            request.identity, PostId(UUID(request.post_id)), patch
        )
        return UpdatePostResponse.from_post(post, request.identity)
