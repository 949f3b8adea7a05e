"""Post domain service.

All mutations of the Post aggregate go through here. Each operation checks
identity, existence and authorization before anything is written, then
hands the change to a single atomic repository call.
"""

from datetime import timedelta
from typing import Any, Optional
from uuid import uuid4

import logfire

from blog.config import PostSettings
from blog.domain.error import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ResolutionFailure,
    ValidationError,
)
from blog.domain.model.comment import Comment
from blog.domain.model.common import utc_now
from blog.domain.model.identity import Identity
from blog.domain.model.post import Post
from blog.domain.repository import PostRepository
from blog.domain.value import (
    CommentId,
    LikeToggleResult,
    PostId,
    PostPatch,
    Slug,
    UserId,
)

from .authorization import Action, AuthorizationPolicy
from .base import Service
from .view_deduplicator import ViewDeduplicator

_TICK = timedelta(microseconds=1)


class PostService(Service):
    """Domain service for post, comment, like and view operations."""

    def __init__(
        self,
        post_repository: PostRepository,
        authorization_policy: AuthorizationPolicy,
        view_deduplicator: ViewDeduplicator,
        post_settings: PostSettings,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            authorization_policy: Owner-or-admin rules
            view_deduplicator: Per-client view window
            post_settings: Content limits
        """
        self.post_repository = post_repository
        self.authorization_policy = authorization_policy
        self.view_deduplicator = view_deduplicator
        self.post_settings = post_settings

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    async def create_post(
        self,
        identity: Identity,
        title: str,
        content: str,
        categories: Optional[list[str]] = None,
        slug: Optional[str] = None,
    ) -> Post:
        """Create a post authored by the calling identity.

        Args:
            identity: Resolved caller
            title: Post title, trimmed before storing
            content: Post body, stored verbatim
            categories: Category names; blanks and duplicates are dropped
            slug: Optional URL slug, must be unused

        Returns:
            Created post

        Raises:
            AuthenticationError: If the caller is anonymous
            ValidationError: If title, content or categories are invalid
            ConflictError: If the slug is taken
        """
        self._require_identity(identity)

        with logfire.span(
            "post_service.create_post", author_id=_id_str(identity.user_id)
        ):
            clean_title = self._clean_title(title)
            body = self._require_text(content, "Content")
            clean_categories = self._clean_categories(categories or [])
            post_slug = None
            if slug is not None and slug.strip():
                post_slug = self._parse_slug(slug)
                if await self.post_repository.slug_exists(post_slug):
                    raise ConflictError("Slug already in use")

            now = utc_now()
            post = Post(
                id=PostId(uuid4()),
                title=clean_title,
                content=body,
                categories=clean_categories,
                slug=post_slug,
                author_id=identity.user_id,
                author_name=identity.display_name,
                likes=frozenset(),
                comments=[],
                views=0,
                created_at=now,
                updated_at=now,
            )

            created = await self.post_repository.create(post)
            logfire.info(
                "Post created",
                post_id=str(created.id),
                title=created.title,
                categories=created.categories,
            )
            return created

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.get_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("post", str(post_id))
            return post

    async def list_posts(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[Post], int]:
        """List posts newest first, with the total for pagination.

        Args:
            query: Case-insensitive search over title and content
            category: Exact category filter
            limit: Page size
            offset: Posts to skip

        Returns:
            Page of posts and total number of matches
        """
        query = query.strip() if query and query.strip() else None
        category = category.strip() if category and category.strip() else None

        with logfire.span(
            "post_service.list_posts",
            query=query,
            category=category,
            limit=limit,
            offset=offset,
        ):
            posts = await self.post_repository.find_all(
                query=query, category=category, limit=limit, offset=offset
            )
            total = await self.post_repository.count(query=query, category=category)
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def list_posts_by_author(self, author_id: UserId) -> list[Post]:
        """All posts written by a user, newest first."""
        with logfire.span(
            "post_service.list_posts_by_author", author_id=str(author_id)
        ):
            return await self.post_repository.find_by_author(author_id)

    async def update_post(
        self, identity: Identity, post_id: PostId, patch: PostPatch
    ) -> Post:
        """Apply a partial update to a post.

        Only fields set in the patch change. Likes, comments and views are
        left alone even if they change concurrently. ``updated_at`` always
        advances.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: Unless the caller owns the post or is admin
            ValidationError: If a supplied field is invalid
            ConflictError: If the new slug belongs to another post
        """
        self._require_identity(identity)

        with logfire.span(
            "post_service.update_post",
            post_id=str(post_id),
            user_id=_id_str(identity.user_id),
        ):
            post = await self.get_post(post_id)
            self.authorization_policy.require(
                identity, Action.UPDATE, post, "post", str(post_id)
            )

            fields: dict[str, Any] = {}
            if patch.title is not None:
                fields["title"] = self._clean_title(patch.title)
            if patch.content is not None:
                fields["content"] = self._require_text(patch.content, "Content")
            if patch.categories is not None:
                fields["categories"] = self._clean_categories(patch.categories)
            if patch.slug is not None:
                if not patch.slug.strip():
                    fields["slug"] = None
                else:
                    new_slug = self._parse_slug(patch.slug)
                    if new_slug != post.slug:
                        if await self.post_repository.slug_exists(
                            new_slug, exclude_post_id=post_id
                        ):
                            raise ConflictError("Slug already in use")
                        fields["slug"] = new_slug

            # Strictly later than the stored value, even on coarse clocks
            fields["updated_at"] = max(utc_now(), post.updated_at + _TICK)

            updated = await self.post_repository.update_fields(post_id, fields)
            if updated is None:
                # Deleted between the read and the write
                raise NotFoundError("post", str(post_id))

            logfire.info(
                "Post updated",
                post_id=str(post_id),
                fields=sorted(k for k in fields if k != "updated_at"),
            )
            return updated

    async def delete_post(self, identity: Identity, post_id: PostId) -> None:
        """Delete a post with all of its comments and likes.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: Unless the caller owns the post or is admin
        """
        self._require_identity(identity)

        with logfire.span(
            "post_service.delete_post",
            post_id=str(post_id),
            user_id=_id_str(identity.user_id),
        ):
            post = await self.get_post(post_id)
            self.authorization_policy.require(
                identity, Action.DELETE, post, "post", str(post_id)
            )

            if not await self.post_repository.delete(post_id):
                raise NotFoundError("post", str(post_id))

            logfire.info(
                "Post deleted",
                post_id=str(post_id),
                comments_removed=post.comment_count,
            )

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    async def toggle_like(
        self, identity: Identity, post_id: PostId
    ) -> LikeToggleResult:
        """Like the post if the caller hasn't yet, otherwise unlike it.

        Not ownership-gated: authors may like their own posts.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the post doesn't exist
            NotAuthorizedError: If the caller has no account to like with
        """
        self._require_identity(identity)

        with logfire.span(
            "post_service.toggle_like",
            post_id=str(post_id),
            user_id=_id_str(identity.user_id),
        ):
            if not await self.post_repository.exists(post_id):
                raise NotFoundError("post", str(post_id))
            self.authorization_policy.require(
                identity, Action.TOGGLE_LIKE, None, "post", str(post_id)
            )

            result = await self.post_repository.toggle_like(post_id, identity.user_id)
            if result is None:
                raise NotFoundError("post", str(post_id))

            logfire.info(
                "Like toggled",
                post_id=str(post_id),
                liked=result.liked,
                like_count=result.like_count,
            )
            return result

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def add_comment(
        self, identity: Identity, post_id: PostId, content: str
    ) -> Comment:
        """Append a comment to a post.

        Raises:
            AuthenticationError: If the caller is anonymous
            ValidationError: If the content is blank
            NotFoundError: If the post doesn't exist
        """
        self._require_identity(identity)

        with logfire.span(
            "post_service.add_comment",
            post_id=str(post_id),
            author_id=_id_str(identity.user_id),
        ):
            body = self._require_text(content, "Comment")
            comment = Comment(
                id=CommentId(uuid4()),
                author_id=identity.user_id,
                author_name=identity.display_name,
                content=body,
                created_at=utc_now(),
            )

            stored = await self.post_repository.append_comment(post_id, comment)
            if stored is None:
                logfire.warn("Comment target post not found", post_id=str(post_id))
                raise NotFoundError("post", str(post_id))

            logfire.info(
                "Comment added", post_id=str(post_id), comment_id=str(stored.id)
            )
            return stored

    async def get_comment(self, post_id: PostId, comment_id: CommentId) -> Comment:
        """Get one comment of a post.

        Raises:
            NotFoundError: If the post or the comment doesn't exist
        """
        comment = await self.post_repository.find_comment(post_id, comment_id)
        if comment is None:
            if not await self.post_repository.exists(post_id):
                raise NotFoundError("post", str(post_id))
            raise NotFoundError("comment", str(comment_id))
        return comment

    async def edit_comment(
        self,
        identity: Identity,
        post_id: PostId,
        comment_id: CommentId,
        content: str,
    ) -> Comment:
        """Replace a comment's content.

        Authorization is checked against the comment's author, not the
        post's.

        Raises:
            AuthenticationError: If the caller is anonymous
            ValidationError: If the content is blank
            NotFoundError: If the post or the comment doesn't exist
            NotAuthorizedError: Unless the caller wrote the comment or is admin
        """
        self._require_identity(identity)

        with logfire.span(
            "post_service.edit_comment",
            post_id=str(post_id),
            comment_id=str(comment_id),
            user_id=_id_str(identity.user_id),
        ):
            body = self._require_text(content, "Comment")
            comment = await self.get_comment(post_id, comment_id)
            self.authorization_policy.require(
                identity, Action.UPDATE, comment, "comment", str(comment_id)
            )

            updated = await self.post_repository.update_comment_content(
                post_id, comment_id, body
            )
            if updated is None:
                raise NotFoundError("comment", str(comment_id))

            logfire.info("Comment edited", comment_id=str(comment_id))
            return updated

    async def delete_comment(
        self, identity: Identity, post_id: PostId, comment_id: CommentId
    ) -> None:
        """Remove a comment. Remaining comments keep their order.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the post or the comment doesn't exist
            NotAuthorizedError: Unless the caller wrote the comment or is admin
        """
        self._require_identity(identity)

        with logfire.span(
            "post_service.delete_comment",
            post_id=str(post_id),
            comment_id=str(comment_id),
            user_id=_id_str(identity.user_id),
        ):
            comment = await self.get_comment(post_id, comment_id)
            self.authorization_policy.require(
                identity, Action.DELETE, comment, "comment", str(comment_id)
            )

            if not await self.post_repository.delete_comment(post_id, comment_id):
                raise NotFoundError("comment", str(comment_id))

            logfire.info("Comment deleted", comment_id=str(comment_id))

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    async def record_view(self, client_token: str, post_id: PostId) -> int:
        """Count a view once per client and return the current view count.

        Not identity-gated. Whether an author's own views count is up to the
        caller: this method never knows who is reading.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.record_view", post_id=str(post_id)):
            views = await self.post_repository.get_views(post_id)
            if views is None:
                raise NotFoundError("post", str(post_id))

            if not await self.view_deduplicator.should_count(client_token, post_id):
                return views

            new_views = await self.post_repository.increment_views(post_id)
            if new_views is None:
                raise NotFoundError("post", str(post_id))

            logfire.info("View counted", post_id=str(post_id), views=new_views)
            return new_views

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _require_identity(identity: Identity) -> None:
        if identity.kind == "anonymous":
            raise AuthenticationError(
                ResolutionFailure.UNAUTHENTICATED, credentials_supplied=False
            )

    def _clean_title(self, title: str) -> str:
        cleaned = title.strip()
        if not cleaned:
            raise ValidationError("Title is required")
        max_length = self.post_settings.title_max_length
        if len(cleaned) > max_length:
            raise ValidationError(f"Title must be at most {max_length} characters")
        return cleaned

    @staticmethod
    def _require_text(value: str, what: str) -> str:
        if not value or not value.strip():
            raise ValidationError(f"{what} is required")
        return value

    def _clean_categories(self, categories: list[str]) -> list[str]:
        cleaned: list[str] = []
        for category in categories:
            name = category.strip()
            if name and name not in cleaned:
                cleaned.append(name)

        max_categories = self.post_settings.max_categories
        if len(cleaned) > max_categories:
            raise ValidationError(f"At most {max_categories} categories are allowed")
        return cleaned

    @staticmethod
    def _parse_slug(raw: str) -> Slug:
        try:
            return Slug(raw.strip())
        except ValueError as e:
            raise ValidationError(f"Invalid slug: {raw!r}") from e


def _id_str(user_id: Optional[UserId]) -> Optional[str]:
    return str(user_id) if user_id is not None else None
