"""In-memory view history repository for testing."""

from collections import OrderedDict

from blog.domain.repository.view_history import ViewHistoryRepository
from blog.domain.value import PostId


class InMemoryViewHistoryRepository(ViewHistoryRepository):
    """Keeps one insertion-ordered window of post ids per client."""

    def __init__(self) -> None:
        self._windows: dict[str, OrderedDict[PostId, None]] = {}

    async def record_if_absent(
        self, client_token: str, post_id: PostId, limit: int
    ) -> bool:
        """Remember a view unless already present, evicting oldest first."""
        window = self._windows.setdefault(client_token, OrderedDict())
        if post_id in window:
            return False

        window[post_id] = None
        while len(window) > limit:
            window.popitem(last=False)
        return True
