"""Per-client view deduplication."""

import secrets

import logfire

from blog.config import ViewSettings
from blog.domain.repository import ViewHistoryRepository
from blog.domain.value import PostId

from .base import Service


class ViewDeduplicator(Service):
    """Decides whether a view should be counted.

    Each client is identified by an opaque token (a cookie, not an account),
    so anonymous readers are deduplicated too. The client's window holds the
    most recent ``history_limit`` distinct posts; older entries are evicted
    first-in first-out. Losing the token resets the window, which is
    accepted: this prevents double counting on reloads, nothing more.
    """

    def __init__(
        self,
        view_history_repository: ViewHistoryRepository,
        view_settings: ViewSettings,
    ) -> None:
        self.view_history_repository = view_history_repository
        self.view_settings = view_settings

    async def should_count(self, client_token: str, post_id: PostId) -> bool:
        """Record the view and return True unless it was already counted."""
        with logfire.span("view_deduplicator.should_count", post_id=str(post_id)):
            first_view = await self.view_history_repository.record_if_absent(
                client_token, post_id, self.view_settings.history_limit
            )
            if not first_view:
                logfire.debug("Repeat view ignored", post_id=str(post_id))
            return first_view

    @staticmethod
    def new_client_token() -> str:
        """Mint a token for a client that has none."""
        return secrets.token_urlsafe(24)
