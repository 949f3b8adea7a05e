"""Response models shared by post and comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from blog.domain.model import Comment, Post
from blog.domain.model.identity import Identity


class CommentResponse(BaseModel):
    """A comment as returned to clients."""

    comment_id: str
    author_id: str | None
    author_name: str
    content: str
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls(
            comment_id=str(comment.id),
            author_id=str(comment.author_id) if comment.author_id else None,
            author_name=comment.author_name,
            content=comment.content,
            created_at=comment.created_at,
        )


class PostSummary(BaseModel):
    """Post list item, without body or comments."""

    post_id: str
    title: str
    categories: list[str]
    slug: str | None
    author_id: str | None
    author_name: str
    like_count: int
    liked: bool  # Whether the viewer likes the post
    comment_count: int
    views: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def summary_fields(cls, post: Post, viewer: Identity) -> dict:
        """Field values common to every post response."""
        return {
            "post_id": str(post.id),
            "title": post.title,
            "categories": list(post.categories),
            "slug": str(post.slug) if post.slug else None,
            "author_id": str(post.author_id) if post.author_id else None,
            "author_name": post.author_name,
            "like_count": post.like_count,
            "liked": viewer.user_id is not None and post.is_liked_by(viewer.user_id),
            "comment_count": post.comment_count,
            "views": post.views,
            "created_at": post.created_at,
            "updated_at": post.updated_at,
        }

    @classmethod
    def from_post(cls, post: Post, viewer: Identity) -> "PostSummary":
        return cls(**cls.summary_fields(post, viewer))


class PostResponse(PostSummary):
    """Full post with content and comments in display order."""

    content: str
    comments: list[CommentResponse]

    @classmethod
    def from_post(cls, post: Post, viewer: Identity) -> "PostResponse":
        return cls(
            **cls.summary_fields(post, viewer),
            content=post.content,
            comments=[CommentResponse.from_comment(c) for c in post.comments],
        )
