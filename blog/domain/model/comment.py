"""Comment entity.

Comments live inside a post and are listed in the order they were accepted.
``author_id`` never changes after creation; only ``content`` is editable.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from blog.domain.model.common import DomainModel, utc_now
from blog.domain.value import CommentId, UserId


class Comment(DomainModel):
    """Comment on a post."""

    id: CommentId
    # None when written through the admin key without a backing account
    author_id: Optional[UserId] = None
    # Snapshot of the author's name when the comment was written
    author_name: str
    content: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=utc_now)
