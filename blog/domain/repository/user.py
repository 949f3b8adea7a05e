"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from blog.domain.model.user import User
from blog.domain.value import UserId

PROFILE_FIELDS = frozenset({"username", "bio", "linkedin", "github"})


class UserRepository(ABC):
    """Repository for user accounts."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive).

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 50, offset: int = 0) -> List[User]:
        """List users, oldest account first."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def update_profile(
        self, user_id: UserId, fields: Dict[str, Any]
    ) -> Optional[User]:
        """Overwrite the given profile fields and bump ``updated_at``.

        Args:
            user_id: User to update
            fields: Subset of PROFILE_FIELDS with their new values

        Raises:
            ConflictError: If the username is taken

        Returns:
            The updated user, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete an account.

        Returns:
            True if the account existed
        """
        pass
