"""List posts use case."""

import math

import logfire
from pydantic import BaseModel, Field

from blog.application.usecase.schema import PostSummary
from blog.config import PostSettings
from blog.domain.model.identity import ANONYMOUS, Identity
from blog.domain.service import PostService


class ListPostsRequest(BaseModel):
    """List posts request."""

    query: str | None = None  # Search in title and content
    category: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)  # Defaults to settings
    identity: Identity = ANONYMOUS


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostSummary]
    total: int
    page: int
    limit: int
    pages: int


class ListPostsUseCase:
    """Use case for listing posts with search, filtering and pagination."""

    def __init__(self, post_service: PostService, post_settings: PostSettings) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            post_settings: Page size defaults and limits
        """
        self.post_service = post_service
        self.post_settings = post_settings

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Page sizes above the configured maximum are capped.
        """
        limit = min(
            request.limit or self.post_settings.default_page_size,
            self.post_settings.max_page_size,
        )
        offset = (request.page - 1) * limit

        posts, total = await self.post_service.list_posts(
            query=request.query,
            category=request.category,
            limit=limit,
            offset=offset,
        )
        logfire.debug("Listed posts", page=request.page, limit=limit, total=total)

        return ListPostsResponse(
            posts=[PostSummary.from_post(post, request.identity) for post in posts],
            total=total,
            page=request.page,
            limit=limit,
            pages=math.ceil(total / limit) if total else 0,
        )
