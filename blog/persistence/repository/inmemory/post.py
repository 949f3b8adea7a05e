"""In-memory post repository for testing.

Every method runs without awaiting anything, so each call is atomic with
respect to other coroutines on the same event loop.
"""

from typing import Any, Optional

from blog.domain.error import ConflictError
from blog.domain.model.comment import Comment
from blog.domain.model.post import Post
from blog.domain.repository.post import UPDATABLE_FIELDS, PostRepository
from blog.domain.value import CommentId, LikeToggleResult, PostId, Slug, UserId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def exists(self, post_id: PostId) -> bool:
        """Check whether a post exists."""
        return post_id in self._posts

    async def find_all(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination."""
        posts = self._filter(query, category)
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[offset : offset + limit]

    async def count(
        self, query: Optional[str] = None, category: Optional[str] = None
    ) -> int:
        """Count posts matching the given filters."""
        return len(self._filter(query, category))

    async def find_by_author(self, author_id: UserId) -> list[Post]:
        """Find posts by a specific author."""
        posts = [p for p in self._posts.values() if p.author_id == author_id]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts

    async def slug_exists(
        self, slug: Slug, exclude_post_id: Optional[PostId] = None
    ) -> bool:
        """Check if another post uses the slug."""
        return any(
            post.slug == slug and post.id != exclude_post_id
            for post in self._posts.values()
        )

    async def create(self, post: Post) -> Post:
        """Insert a new post."""
        if post.slug is not None and self._slug_taken(post.slug, post.id):
            raise ConflictError("Slug already in use")
        self._posts[post.id] = post
        return post

    async def update_fields(
        self, post_id: PostId, fields: dict[str, Any]
    ) -> Optional[Post]:
        """Overwrite only the given fields."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        post = self._posts.get(post_id)
        if post is None:
            return None
        new_slug = fields.get("slug")
        if new_slug is not None and self._slug_taken(new_slug, post_id):
            raise ConflictError("Slug already in use")

        updated = post.model_copy(update=fields)
        self._posts[post_id] = updated
        return updated

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post; comments and likes go with it."""
        return self._posts.pop(post_id, None) is not None

    async def toggle_like(
        self, post_id: PostId, user_id: UserId
    ) -> Optional[LikeToggleResult]:
        """Flip the user's like."""
        post = self._posts.get(post_id)
        if post is None:
            return None

        liked = user_id not in post.likes
        likes = (post.likes | {user_id}) if liked else (post.likes - {user_id})
        self._posts[post_id] = post.model_copy(update={"likes": frozenset(likes)})
        return LikeToggleResult(like_count=len(likes), liked=liked)

    async def append_comment(
        self, post_id: PostId, comment: Comment
    ) -> Optional[Comment]:
        """Append a comment to the end of the list."""
        post = self._posts.get(post_id)
        if post is None:
            return None
        self._posts[post_id] = post.model_copy(
            update={"comments": [*post.comments, comment]}
        )
        return comment

    async def find_comment(
        self, post_id: PostId, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find one comment of a post."""
        post = self._posts.get(post_id)
        return post.find_comment(comment_id) if post else None

    async def update_comment_content(
        self, post_id: PostId, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace a comment's content."""
        post = self._posts.get(post_id)
        if post is None:
            return None

        updated_comment = None
        comments = []
        for comment in post.comments:
            if comment.id == comment_id:
                comment = comment.model_copy(update={"content": content})
                updated_comment = comment
            comments.append(comment)

        if updated_comment is not None:
            self._posts[post_id] = post.model_copy(update={"comments": comments})
        return updated_comment

    async def delete_comment(self, post_id: PostId, comment_id: CommentId) -> bool:
        """Remove one comment."""
        post = self._posts.get(post_id)
        if post is None:
            return False
        remaining = [c for c in post.comments if c.id != comment_id]
        if len(remaining) == len(post.comments):
            return False
        self._posts[post_id] = post.model_copy(update={"comments": remaining})
        return True

    async def detach_user(self, user_id: UserId) -> None:
        """Drop a user's likes and clear their authorship."""
        orphaned = {"author_id": None}
        for post_id, post in list(self._posts.items()):
            comments = [
                c.model_copy(update=orphaned) if c.author_id == user_id else c
                for c in post.comments
            ]
            update: dict[str, Any] = {
                "likes": post.likes - {user_id},
                "comments": comments,
            }
            if post.author_id == user_id:
                update["author_id"] = None
            self._posts[post_id] = post.model_copy(update=update)

    async def increment_views(self, post_id: PostId) -> Optional[int]:
        """Add one view."""
        post = self._posts.get(post_id)
        if post is None:
            return None
        self._posts[post_id] = post.model_copy(update={"views": post.views + 1})
        return post.views + 1

    async def get_views(self, post_id: PostId) -> Optional[int]:
        """Read the view count."""
        post = self._posts.get(post_id)
        return post.views if post else None

    def _filter(self, query: Optional[str], category: Optional[str]) -> list[Post]:
        posts = list(self._posts.values())
        if query:
            needle = query.casefold()
            posts = [
                p
                for p in posts
                if needle in p.title.casefold() or needle in p.content.casefold()
            ]
        if category:
            posts = [p for p in posts if category in p.categories]
        return posts

    def _slug_taken(self, slug: Slug, post_id: PostId) -> bool:
        return any(p.slug == slug and p.id != post_id for p in self._posts.values())
