"""Mock persistence providers for testing."""

from typing import Iterable, Optional

from dishka import Scope, provide

from blog.domain.model.user import User
from blog.domain.repository import (
    PostRepository,
    UserRepository,
    ViewHistoryRepository,
)
from blog.persistence.repository.inmemory import (
    InMemoryPostRepository,
    InMemoryUserRepository,
    InMemoryViewHistoryRepository,
)
from blog.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so state survives across requests of one
    container, the way a database would. Each test builds its own container,
    so tests stay isolated.
    """

    __is_mock__ = True

    def __init__(
        self,
        users: Iterable[User] = (),
        post_repository: Optional[InMemoryPostRepository] = None,
        view_history_repository: Optional[InMemoryViewHistoryRepository] = None,
    ) -> None:
        """Initialize mock persistence.

        Args:
            users: Accounts to seed the user repository with
            post_repository: Shared post repository, fresh if omitted
            view_history_repository: Shared view history, fresh if omitted
        """
        super().__init__()
        self._user_repository = InMemoryUserRepository(users)
        self._post_repository = post_repository or InMemoryPostRepository()
        self._view_history_repository = (
            view_history_repository or InMemoryViewHistoryRepository()
        )

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return self._user_repository

    @provide(scope=Scope.APP)
    def get_post_repository(self) -> PostRepository:
        """Provide in-memory post repository."""
        return self._post_repository

    @provide(scope=Scope.APP)
    def get_view_history_repository(self) -> ViewHistoryRepository:
        """Provide in-memory view history repository."""
        return self._view_history_repository
