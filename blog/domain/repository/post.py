"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from blog.domain.model.comment import Comment
from blog.domain.model.post import Post
from blog.domain.value import CommentId, LikeToggleResult, PostId, Slug, UserId

# Columns that update_fields may change
UPDATABLE_FIELDS = frozenset({"title", "content", "categories", "slug", "updated_at"})


class PostRepository(ABC):
    """Repository for the Post aggregate.

    Every mutating method is a single atomic operation against the store.
    Likes, views and comments are never written back from a previously read
    copy of the post, so concurrent requests touching the same post cannot
    overwrite each other.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, with its comments and likes.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, post_id: PostId) -> bool:
        """Check whether a post exists without loading it."""
        pass

    @abstractmethod
    async def find_all(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts, newest first.

        Args:
            query: Case-insensitive text matched against title and content
            category: Only posts carrying this exact category
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self, query: Optional[str] = None, category: Optional[str] = None
    ) -> int:
        """Count posts matching the same filters as find_all."""
        pass

    @abstractmethod
    async def find_by_author(self, author_id: UserId) -> List[Post]:
        """Find every post written by a user, newest first."""
        pass

    @abstractmethod
    async def slug_exists(
        self, slug: Slug, exclude_post_id: Optional[PostId] = None
    ) -> bool:
        """Check whether a slug is taken.

        Args:
            slug: Slug to look up
            exclude_post_id: Post to ignore (the one being updated)

        Returns:
            True if another post already uses the slug
        """
        pass

    @abstractmethod
    async def create(self, post: Post) -> Post:
        """Insert a new post.

        Raises:
            ConflictError: If the slug is already taken
        """
        pass

    @abstractmethod
    async def update_fields(
        self, post_id: PostId, fields: dict[str, Any]
    ) -> Optional[Post]:
        """Overwrite only the given columns of a post.

        Likes, comments and views are never touched here.

        Args:
            post_id: Post to update
            fields: Subset of title, content, categories, slug, updated_at

        Returns:
            The updated post, or None if it doesn't exist

        Raises:
            ConflictError: If the new slug is already taken
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post together with its comments and likes.

        Returns:
            True if a post was removed
        """
        pass

    @abstractmethod
    async def toggle_like(
        self, post_id: PostId, user_id: UserId
    ) -> Optional[LikeToggleResult]:
        """Flip the user's membership in the post's like set.

        Returns:
            New like count and whether the user now likes the post,
            or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def append_comment(
        self, post_id: PostId, comment: Comment
    ) -> Optional[Comment]:
        """Append a comment at the end of the post's comment list.

        Returns:
            The stored comment, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def find_comment(
        self, post_id: PostId, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find one comment of a post."""
        pass

    @abstractmethod
    async def update_comment_content(
        self, post_id: PostId, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace a comment's content, leaving every other field alone.

        Returns:
            The updated comment, or None if post or comment doesn't exist
        """
        pass

    @abstractmethod
    async def delete_comment(self, post_id: PostId, comment_id: CommentId) -> bool:
        """Remove one comment. The order of the others is unchanged.

        Returns:
            True if a comment was removed
        """
        pass

    @abstractmethod
    async def detach_user(self, user_id: UserId) -> None:
        """Forget a deleted account's activity.

        The user's likes are removed. Posts and comments stay, keep their
        author name snapshot, and lose their ``author_id``.
        """
        pass

    @abstractmethod
    async def increment_views(self, post_id: PostId) -> Optional[int]:
        """Atomically add one view.

        Returns:
            The new view count, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def get_views(self, post_id: PostId) -> Optional[int]:
        """Read the current view count without loading the whole post."""
        pass
