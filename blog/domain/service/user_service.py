"""User domain service."""

import logfire

from blog.domain.error import NotFoundError, ValidationError
from blog.domain.model.user import User
from blog.domain.repository import PostRepository, UserRepository
from blog.domain.value import ProfilePatch, UserId
from blog.domain.value.common import ValueObject

from .base import Service

USERNAME_MAX_LENGTH = 50
BIO_MAX_LENGTH = 500
LINK_MAX_LENGTH = 255


class UserStats(ValueObject):
    """Totals across every post a user has written."""

    total_posts: int = 0
    total_views: int = 0
    total_likes: int = 0
    total_comments: int = 0


class UserService(Service):
    """Domain service for user accounts."""

    def __init__(
        self, user_repository: UserRepository, post_repository: PostRepository
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            post_repository: Post repository, for stats and account deletion
        """
        self.user_repository = user_repository
        self.post_repository = post_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("user", str(user_id))
            return user

    async def list_users(self, limit: int = 50, offset: int = 0) -> list[User]:
        """List accounts, oldest first."""
        with logfire.span("user_service.list_users", limit=limit, offset=offset):
            return await self.user_repository.find_all(limit=limit, offset=offset)

    async def update_profile(self, user_id: UserId, patch: ProfilePatch) -> User:
        """Apply a partial profile update.

        A new username is trimmed and must be unique. Names already copied
        onto posts and comments are not rewritten. Blank ``bio``,
        ``linkedin`` or ``github`` values clear the field.

        Raises:
            ValidationError: If a field is blank where required or too long
            ConflictError: If the username is taken
            NotFoundError: If the user doesn't exist
        """
        fields: dict[str, str | None] = {}
        if patch.username is not None:
            fields["username"] = _validate_username(patch.username)
        if patch.bio is not None:
            fields["bio"] = _optional_text(patch.bio, "Bio", BIO_MAX_LENGTH)
        if patch.linkedin is not None:
            fields["linkedin"] = _optional_text(
                patch.linkedin, "LinkedIn", LINK_MAX_LENGTH
            )
        if patch.github is not None:
            fields["github"] = _optional_text(patch.github, "GitHub", LINK_MAX_LENGTH)

        with logfire.span(
            "user_service.update_profile", user_id=str(user_id), fields=sorted(fields)
        ):
            updated = await self.user_repository.update_profile(user_id, fields)
            if updated is None:
                raise NotFoundError("user", str(user_id))
            logfire.info(
                "User profile updated", user_id=str(user_id), fields=sorted(fields)
            )
            return updated

    async def delete_user(self, user_id: UserId) -> None:
        """Delete an account.

        Its likes are withdrawn. Posts and comments stay under the author
        name they were written with. Existing tokens for the account stop
        resolving.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        with logfire.span("user_service.delete_user", user_id=str(user_id)):
            if await self.user_repository.find_by_id(user_id) is None:
                raise NotFoundError("user", str(user_id))
            await self.post_repository.detach_user(user_id)
            await self.user_repository.delete(user_id)
            logfire.info("User deleted", user_id=str(user_id))

    async def get_stats(self, user_id: UserId) -> UserStats:
        """Aggregate views, likes and comments over a user's posts."""
        with logfire.span("user_service.get_stats", user_id=str(user_id)):
            posts = await self.post_repository.find_by_author(user_id)
            return UserStats(
                total_posts=len(posts),
                total_views=sum(post.views for post in posts),
                total_likes=sum(post.like_count for post in posts),
                total_comments=sum(post.comment_count for post in posts),
            )


def _validate_username(username: str) -> str:
    cleaned = username.strip()
    if not cleaned:
        raise ValidationError("Username is required")
    if len(cleaned) > USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be at most {USERNAME_MAX_LENGTH} characters"
        )
    return cleaned


def _optional_text(value: str, label: str, max_length: int) -> str | None:
    cleaned = value.strip()
    if len(cleaned) > max_length:
        raise ValidationError(f"{label} must be at most {max_length} characters")
    return cleaned or None
