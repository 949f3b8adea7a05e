"""Test configuration and helpers."""

from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

import logfire

from blog.domain.model.identity import AuthenticatedUserIdentity
from blog.domain.model.user import User
from blog.domain.value import Role, UserId

# Keep spans local; nothing is exported during tests
logfire.configure(send_to_logfire=False, console=False)


def make_user(
    username: str = "alice",
    role: Role = Role.USER,
    email: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> User:
    """Build a user account for tests.

    Args:
        username: Display name
        role: Account role
        email: Login email, ``<username>@example.com`` by default
        created_at: Creation time, now by default
    """
    kwargs = {}
    if created_at is not None:
        kwargs["created_at"] = created_at
        kwargs["updated_at"] = created_at + timedelta(seconds=1)
    return User(
        id=UserId(uuid4()),
        username=username,
        email=email or f"{username}@example.com",
        role=role,
        **kwargs,
    )


def identity_for(user: User) -> AuthenticatedUserIdentity:
    """The identity a valid token for ``user`` resolves to."""
    return AuthenticatedUserIdentity(
        user_id=user.id, display_name=user.username, account_role=user.role
    )
