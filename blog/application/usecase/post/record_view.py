"""Record view use case."""

from uuid import UUID

from pydantic import BaseModel

from blog.domain.service import PostService, ViewDeduplicator
from blog.domain.value import PostId

MAX_CLIENT_TOKEN_LENGTH = 64


class RecordViewRequest(BaseModel):
    """Record view request.

    Views are not identity-gated; the client token alone scopes dedup.
    """

    post_id: str  # UUID string
    client_token: str | None = None  # None for first-time clients


class RecordViewResponse(BaseModel):
    """Record view response."""

    views: int
    client_token: str  # To be stored by the client for later views


class RecordViewUseCase:
    """Use case for counting a post view at most once per client."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize record view use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: RecordViewRequest) -> RecordViewResponse:
        """Execute record view flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        client_token = request.client_token
        if not client_token or len(client_token) > MAX_CLIENT_TOKEN_LENGTH:
            # Oversized tokens are replaced, which resets that client's window
            client_token = ViewDeduplicator.new_client_token()

        views = await self.post_service.record_view(
            client_token, PostId(UUID(request.post_id))
        )
        return RecordViewResponse(views=views, client_token=client_token)
