"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from blog.domain.model import Comment, Post, User
from blog.domain.value import CommentId, PostId, Role, Slug, UserId


def _uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        email=row.get("email"),
        role=Role(row["role"]),
        bio=row.get("bio"),
        avatar_url=row.get("avatar_url"),
        linkedin=row.get("linkedin"),
        github=row.get("github"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump(mode="python")
    data["role"] = user.role.value
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    author_id = _uuid(row.get("author_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        author_id=UserId(author_id) if author_id else None,
        author_name=row["author_name"],
        content=row["content"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment, post_id: PostId) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    ``seq`` is left out; the database assigns it on insert.
    """
    return {
        "id": comment.id,
        "post_id": post_id,
        "author_id": comment.author_id,
        "author_name": comment.author_name,
        "content": comment.content,
        "created_at": comment.created_at,
    }


def row_to_post(
    row: Dict[str, Any],
    likes: Iterable[UUID] = (),
    comments: Iterable[Comment] = (),
) -> Post:
    """Convert a posts row plus its child rows to a Post domain model.

    Args:
        row: posts row as dict
        likes: User ids from post_likes
        comments: Comments in display order

    Returns:
        Post domain model
    """
    author_id = _uuid(row.get("author_id"))
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        content=row["content"],
        categories=list(row.get("categories") or []),
        slug=Slug(row["slug"]) if row.get("slug") else None,
        author_id=UserId(author_id) if author_id else None,
        author_name=row["author_name"],
        likes=frozenset(UserId(_uuid(user_id)) for user_id in likes),
        comments=list(comments),
        views=row["views"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to a posts row.

    Likes and comments live in their own tables and are excluded.
    """
    data = post.model_dump(mode="python", exclude={"likes", "comments"})
    data["slug"] = str(post.slug) if post.slug is not None else None
    return data
