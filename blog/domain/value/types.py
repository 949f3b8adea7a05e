"""Domain value objects for the blog.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import Field, field_validator

from blog.domain.value.common import RootValueObject, ValueObject


class Role(str, Enum):
    """Account role."""

    USER = "user"
    ADMIN = "admin"


class Slug(RootValueObject[str]):
    """URL-safe slug for posts.

    Must be lowercase, alphanumeric with hyphens, 1-100 characters.
    Examples: 'hello-world', 'notes-on-async-python'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if len(v) < 1 or len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        return v


class Credentials(ValueObject):
    """Raw credentials presented by one request.

    ``admin_keys`` holds every admin key candidate the request carried
    (header, query string, body). Blank values are treated as absent.
    Secrets are excluded from ``repr`` so they never end up in logs.
    """

    bearer_token: str | None = Field(default=None, repr=False)
    admin_keys: tuple[str, ...] = Field(default=(), repr=False)

    @field_validator("bearer_token")
    @classmethod
    def blank_token_is_absent(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("admin_keys")
    @classmethod
    def drop_blank_keys(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(key for key in v if key)

    @property
    def has_token(self) -> bool:
        return self.bearer_token is not None

    @property
    def has_admin_key(self) -> bool:
        return bool(self.admin_keys)


class PostPatch(ValueObject):
    """Partial post update. ``None`` means "leave unchanged".

    An empty ``slug`` string clears the slug.
    """

    title: str | None = None
    content: str | None = None
    categories: list[str] | None = None
    slug: str | None = None


class ProfilePatch(ValueObject):
    """Partial profile update. ``None`` means "leave unchanged".

    An empty string clears ``bio``, ``linkedin`` or ``github``.
    """

    username: str | None = None
    bio: str | None = None
    linkedin: str | None = None
    github: str | None = None


class LikeToggleResult(ValueObject):
    """Outcome of a like toggle."""

    like_count: int = Field(ge=0)
    liked: bool
