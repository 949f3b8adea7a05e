"""Post aggregate root.

A post owns its comments (an ordered list), its likes (a set of user ids)
and a view counter that only ever goes up.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from blog.domain.model.comment import Comment
from blog.domain.model.common import DomainModel, utc_now
from blog.domain.value import CommentId, PostId, Slug, UserId


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    title: str = Field(min_length=1)
    # Stored verbatim, markup included
    content: str = Field(min_length=1)
    categories: list[str] = Field(default_factory=list)
    slug: Optional[Slug] = None
    # None when written through the admin key without a backing account
    author_id: Optional[UserId] = None
    # Snapshot of the author's name at creation time
    author_name: str
    likes: frozenset[UserId] = frozenset()
    comments: list[Comment] = Field(default_factory=list)
    views: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def validate_timestamps(self) -> "Post":
        """An update can never predate creation."""
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not be earlier than created_at")
        return self

    @property
    def like_count(self) -> int:
        return len(self.likes)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    def is_liked_by(self, user_id: UserId | None) -> bool:
        return user_id is not None and user_id in self.likes

    def find_comment(self, comment_id: CommentId) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)
