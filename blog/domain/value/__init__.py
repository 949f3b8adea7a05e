"""Domain value objects for the blog."""

from blog.domain.value.identifiers import CommentId, PostId, UserId
from blog.domain.value.types import (
    Credentials,
    LikeToggleResult,
    PostPatch,
    ProfilePatch,
    Role,
    Slug,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    # Types
    "Credentials",
    "LikeToggleResult",
    "PostPatch",
    "ProfilePatch",
    "Role",
    "Slug",
]
