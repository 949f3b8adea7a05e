"""Repository interfaces for the blog domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from blog.domain.repository.post import PostRepository
from blog.domain.repository.user import UserRepository
from blog.domain.repository.view_history import ViewHistoryRepository

__all__ = [
    "PostRepository",
    "UserRepository",
    "ViewHistoryRepository",
]
