"""In-memory user repository for testing."""

from typing import Any, Iterable, Optional

from blog.domain.error import ConflictError
from blog.domain.model.common import utc_now
from blog.domain.model.user import User
from blog.domain.repository.user import PROFILE_FIELDS, UserRepository
from blog.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, users: Iterable[User] = ()) -> None:
        self._users: dict[UserId, User] = {user.id: user for user in users}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        wanted = email.casefold()
        for user in self._users.values():
            if user.email is not None and user.email.casefold() == wanted:
                return user
        return None

    async def find_all(self, limit: int = 50, offset: int = 0) -> list[User]:
        """List users, oldest first."""
        users = sorted(self._users.values(), key=lambda u: u.created_at)
        return users[offset : offset + limit]

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

    async def update_profile(
        self, user_id: UserId, fields: dict[str, Any]
    ) -> Optional[User]:
        """Overwrite the given profile fields."""
        unknown = set(fields) - PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        user = self._users.get(user_id)
        if user is None:
            return None
        username = fields.get("username")
        taken = username is not None and any(
            u.username == username and u.id != user_id for u in self._users.values()
        )
        if taken:
            raise ConflictError("Username already in use")

        updated = user.model_copy(update={**fields, "updated_at": utc_now()})
        self._users[user_id] = updated
        return updated

    async def delete(self, user_id: UserId) -> bool:
        """Remove an account."""
        return self._users.pop(user_id, None) is not None
