"""Admin use cases."""

from .delete_any_post import AdminDeletePostUseCase
from .delete_user import (
    AdminDeleteUserUseCase,
    DeleteUserRequest,
    DeleteUserResponse,
)
from .list_all_posts import AdminListPostsUseCase
from .list_users import (
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
    UserListItem,
)

__all__ = [
    "AdminDeletePostUseCase",
    "AdminDeleteUserUseCase",
    "AdminListPostsUseCase",
    "DeleteUserRequest",
    "DeleteUserResponse",
    "ListUsersRequest",
    "ListUsersResponse",
    "ListUsersUseCase",
    "UserListItem",
]
