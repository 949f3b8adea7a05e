"""View history repository interface."""

from abc import ABC, abstractmethod

from blog.domain.value import PostId


class ViewHistoryRepository(ABC):
    """Per-client record of posts whose view has already been counted.

    Each client token owns an independent, bounded window of post ids.
    """

    @abstractmethod
    async def record_if_absent(
        self, client_token: str, post_id: PostId, limit: int
    ) -> bool:
        """Remember a view unless it is already in the client's window.

        When the window grows past ``limit`` entries the oldest entries are
        dropped first. A post that is already present keeps its position.

        Args:
            client_token: Opaque per-client token
            post_id: Viewed post
            limit: Maximum number of posts remembered for this client

        Returns:
            True if the post was newly recorded, False if it was present
        """
        pass
