"""Repository implementations."""

from blog.persistence.repository.post import PostgresPostRepository
from blog.persistence.repository.user import PostgresUserRepository
from blog.persistence.repository.view_history import PostgresViewHistoryRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresUserRepository",
    "PostgresViewHistoryRepository",
]
