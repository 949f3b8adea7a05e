"""Domain model entities for the blog."""

from blog.domain.model.comment import Comment
from blog.domain.model.identity import (
    ANONYMOUS,
    AdminByKeyIdentity,
    AnonymousIdentity,
    AuthenticatedUserIdentity,
    Identity,
)
from blog.domain.model.post import Post
from blog.domain.model.user import User

__all__ = [
    "ANONYMOUS",
    "AdminByKeyIdentity",
    "AnonymousIdentity",
    "AuthenticatedUserIdentity",
    "Comment",
    "Identity",
    "Post",
    "User",
]
