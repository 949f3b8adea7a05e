"""PostgreSQL implementation of Post repository."""

from collections import defaultdict
from typing import Any, List, Optional
from uuid import UUID

import logfire
from sqlalchemy import ColumnElement, delete, desc, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.error import ConflictError
from blog.domain.model import Comment, Post
from blog.domain.repository.post import UPDATABLE_FIELDS, PostRepository
from blog.domain.value import CommentId, LikeToggleResult, PostId, Slug, UserId
from blog.persistence.mappers import (
    comment_to_dict,
    post_to_dict,
    row_to_comment,
    row_to_post,
)
from blog.persistence.repository._errors import translate_store_errors
from blog.persistence.tables import comments_table, post_likes_table, posts_table


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _filters(query: Optional[str], category: Optional[str]) -> list[ColumnElement]:
    clauses: list[ColumnElement] = []
    if query:
        pattern = f"%{_escape_like(query)}%"
        clauses.append(
            or_(
                posts_table.c.title.ilike(pattern, escape="\\"),
                posts_table.c.content.ilike(pattern, escape="\\"),
            )
        )
    if category:
        clauses.append(posts_table.c.categories.any(category))
    return clauses


def _is_slug_violation(error: IntegrityError) -> bool:
    return "slug" in str(error.orig)


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository.

    Like toggles lock the post row so that reading and flipping one user's
    membership is serialized per post. Views and comments are single
    statements and need no lock.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_children(
        self, post_ids: list[UUID]
    ) -> tuple[dict[UUID, list[UUID]], dict[UUID, list[Comment]]]:
        """Fetch likes and comments for multiple posts in two queries.

        Args:
            post_ids: List of post IDs

        Returns:
            (post_id -> liking user ids, post_id -> comments in order)
        """
        if not post_ids:
            return {}, {}

        likes_stmt = select(
            post_likes_table.c.post_id, post_likes_table.c.user_id
        ).where(post_likes_table.c.post_id.in_(post_ids))
        likes_result = await self.session.execute(likes_stmt)
        likes: dict[UUID, list[UUID]] = defaultdict(list)
        for row in likes_result.fetchall():
            likes[row.post_id].append(row.user_id)

        comments_stmt = (
            select(comments_table)
            .where(comments_table.c.post_id.in_(post_ids))
            .order_by(comments_table.c.seq)
        )
        comments_result = await self.session.execute(comments_stmt)
        comments: dict[UUID, list[Comment]] = defaultdict(list)
        for row in comments_result.fetchall():
            comments[row.post_id].append(row_to_comment(row._asdict()))

        return likes, comments

    async def _rows_to_posts(self, rows: list[Any]) -> List[Post]:
        likes, comments = await self._fetch_children([row.id for row in rows])
        return [
            row_to_post(
                row._asdict(),
                likes=likes.get(row.id, []),
                comments=comments.get(row.id, []),
            )
            for row in rows
        ]

    @translate_store_errors
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            posts = await self._rows_to_posts([row])
            return posts[0]

    @translate_store_errors
    async def exists(self, post_id: PostId) -> bool:
        """Check whether a post exists."""
        stmt = select(posts_table.c.id).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        return result.scalar() is not None

    @translate_store_errors
    async def find_all(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination."""
        with logfire.span(
            "post_repository.find_all",
            query=query,
            category=category,
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(posts_table)
                .where(*_filters(query, category))
                .order_by(desc(posts_table.c.created_at), posts_table.c.id)
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            post_rows = result.fetchall()

            if not post_rows:
                logfire.info("No posts found")
                return []

            posts = await self._rows_to_posts(post_rows)
            logfire.info("Found posts", count=len(posts))
            return posts

    @translate_store_errors
    async def count(
        self, query: Optional[str] = None, category: Optional[str] = None
    ) -> int:
        """Count posts matching the given filters."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(*_filters(query, category))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    @translate_store_errors
    async def find_by_author(self, author_id: UserId) -> List[Post]:
        """Find posts by a specific author."""
        stmt = (
            select(posts_table)
            .where(posts_table.c.author_id == author_id)
            .order_by(desc(posts_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        post_rows = result.fetchall()

        if not post_rows:
            return []

        return await self._rows_to_posts(post_rows)

    @translate_store_errors
    async def slug_exists(
        self, slug: Slug, exclude_post_id: Optional[PostId] = None
    ) -> bool:
        """Check if a slug is used by another post."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.slug == str(slug))
        )
        if exclude_post_id is not None:
            stmt = stmt.where(posts_table.c.id != exclude_post_id)

        result = await self.session.execute(stmt)
        exists = (result.scalar() or 0) > 0
        logfire.debug("Slug existence check", slug=str(slug), exists=exists)
        return exists

    @translate_store_errors
    async def create(self, post: Post) -> Post:
        """Insert a new post without likes or comments."""
        with logfire.span(
            "post_repository.create", post_id=str(post.id), title=post.title
        ):
            stmt = posts_table.insert().values(**post_to_dict(post))
            try:
                # Savepoint keeps the outer transaction usable on conflict
                async with self.session.begin_nested():
                    await self.session.execute(stmt)
            except IntegrityError as e:
                if _is_slug_violation(e):
                    raise ConflictError(f"Slug '{post.slug}' is already in use") from e
                raise

            logfire.info("Post inserted", post_id=str(post.id))
            return post

    @translate_store_errors
    async def update_fields(
        self, post_id: PostId, fields: dict[str, Any]
    ) -> Optional[Post]:
        """Update only the given columns and return the fresh post."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {sorted(unknown)}")

        with logfire.span(
            "post_repository.update_fields",
            post_id=str(post_id),
            fields=sorted(fields),
        ):
            values = dict(fields)
            if "slug" in values and values["slug"] is not None:
                values["slug"] = str(values["slug"])

            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post_id)
                .values(**values)
                .returning(posts_table)
            )
            try:
                async with self.session.begin_nested():
                    result = await self.session.execute(stmt)
                    row = result.fetchone()
            except IntegrityError as e:
                if _is_slug_violation(e):
                    raise ConflictError(
                        f"Slug '{values['slug']}' is already in use"
                    ) from e
                raise

            if row is None:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            posts = await self._rows_to_posts([row])
            return posts[0]

    @translate_store_errors
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete). Likes and comments cascade."""
        stmt = (
            delete(posts_table)
            .where(posts_table.c.id == post_id)
            .returning(posts_table.c.id)
        )
        result = await self.session.execute(stmt)
        deleted = result.fetchone() is not None
        await self.session.flush()
        return deleted

    async def _lock_post(self, post_id: PostId, key_share: bool = False) -> bool:
        stmt = (
            select(posts_table.c.id)
            .where(posts_table.c.id == post_id)
            .with_for_update(key_share=key_share)
        )
        result = await self.session.execute(stmt)
        return result.scalar() is not None

    @translate_store_errors
    async def toggle_like(
        self, post_id: PostId, user_id: UserId
    ) -> Optional[LikeToggleResult]:
        """Flip one user's like under a row lock on the post."""
        with logfire.span(
            "post_repository.toggle_like", post_id=str(post_id), user_id=str(user_id)
        ):
            if not await self._lock_post(post_id):
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            removed = await self.session.execute(
                delete(post_likes_table)
                .where(
                    post_likes_table.c.post_id == post_id,
                    post_likes_table.c.user_id == user_id,
                )
                .returning(post_likes_table.c.user_id)
            )
            liked = removed.fetchone() is None
            if liked:
                await self.session.execute(
                    pg_insert(post_likes_table)
                    .values(post_id=post_id, user_id=user_id)
                    .on_conflict_do_nothing(index_elements=["post_id", "user_id"])
                )

            count_stmt = (
                select(func.count())
                .select_from(post_likes_table)
                .where(post_likes_table.c.post_id == post_id)
            )
            like_count = (await self.session.execute(count_stmt)).scalar() or 0
            await self.session.flush()

            logfire.info("Like toggled", liked=liked, like_count=like_count)
            return LikeToggleResult(like_count=like_count, liked=liked)

    @translate_store_errors
    async def append_comment(
        self, post_id: PostId, comment: Comment
    ) -> Optional[Comment]:
        """Insert a comment; its sequence number puts it last."""
        with logfire.span(
            "post_repository.append_comment",
            post_id=str(post_id),
            comment_id=str(comment.id),
        ):
            # Key-share lock blocks a concurrent delete but not other writers
            if not await self._lock_post(post_id, key_share=True):
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            stmt = (
                comments_table.insert()
                .values(**comment_to_dict(comment, post_id))
                .returning(comments_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()
            return row_to_comment(row._asdict())

    @translate_store_errors
    async def find_comment(
        self, post_id: PostId, comment_id: CommentId
    ) -> Optional[Comment]:
        """Find one comment of a post."""
        stmt = select(comments_table).where(
            comments_table.c.post_id == post_id,
            comments_table.c.id == comment_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @translate_store_errors
    async def update_comment_content(
        self, post_id: PostId, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace a comment's content in place."""
        stmt = (
            update(comments_table)
            .where(
                comments_table.c.post_id == post_id,
                comments_table.c.id == comment_id,
            )
            .values(content=content)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            logfire.warn(
                "Comment not found", post_id=str(post_id), comment_id=str(comment_id)
            )
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    @translate_store_errors
    async def delete_comment(self, post_id: PostId, comment_id: CommentId) -> bool:
        """Delete one comment."""
        stmt = (
            delete(comments_table)
            .where(
                comments_table.c.post_id == post_id,
                comments_table.c.id == comment_id,
            )
            .returning(comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        deleted = result.fetchone() is not None
        await self.session.flush()
        return deleted

    @translate_store_errors
    async def detach_user(self, user_id: UserId) -> None:
        """Drop a user's likes and clear their authorship.

        Runs before the account row is deleted, in the same transaction.
        """
        await self.session.execute(
            delete(post_likes_table).where(post_likes_table.c.user_id == user_id)
        )
        await self.session.execute(
            update(posts_table)
            .where(posts_table.c.author_id == user_id)
            .values(author_id=None)
        )
        await self.session.execute(
            update(comments_table)
            .where(comments_table.c.author_id == user_id)
            .values(author_id=None)
        )
        await self.session.flush()

    @translate_store_errors
    async def increment_views(self, post_id: PostId) -> Optional[int]:
        """Atomically increment views by 1."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(views=posts_table.c.views + 1)
            .returning(posts_table.c.views)
        )
        result = await self.session.execute(stmt)
        views = result.scalar()
        await self.session.flush()
        return views

    @translate_store_errors
    async def get_views(self, post_id: PostId) -> Optional[int]:
        """Read the view counter of a post."""
        stmt = select(posts_table.c.views).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        return result.scalar()
