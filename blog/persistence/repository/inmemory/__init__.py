"""In-memory repository implementations for testing."""

from .post import InMemoryPostRepository
from .user import InMemoryUserRepository
from .view_history import InMemoryViewHistoryRepository

__all__ = [
    "InMemoryPostRepository",
    "InMemoryUserRepository",
    "InMemoryViewHistoryRepository",
]
