"""User account.

Accounts are created and authenticated elsewhere; this service only reads
them to resolve identities and lets owners edit their profile.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from blog.domain.model.common import DomainModel, utc_now
from blog.domain.value import Role, UserId


class User(DomainModel):
    """Registered account."""

    id: UserId
    username: str = Field(min_length=1, max_length=50)
    email: Optional[str] = None
    role: Role = Role.USER
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar_url: Optional[str] = None
    linkedin: Optional[str] = Field(default=None, max_length=255)
    github: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
