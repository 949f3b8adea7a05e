"""Resolved request identity.

An identity is built fresh for every request from the credentials it
carried and is never persisted. It is a tagged union: code that needs to
branch on how the caller authenticated matches on ``kind``, never on which
credential happened to be present.

``role`` is derived from the variant and cannot be passed in:

- ``AnonymousIdentity``: no user, no role
- ``AuthenticatedUserIdentity``: the stored role of the token's account
- ``AdminByKeyIdentity``: always admin; ``user_id`` is set only when the
  configured admin account exists (otherwise the identity is synthetic)
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from blog.domain.model.common import DomainModel
from blog.domain.value import Role, UserId


class AnonymousIdentity(DomainModel):
    """Caller presented no credentials."""

    kind: Literal["anonymous"] = "anonymous"

    @property
    def user_id(self) -> None:
        return None

    @property
    def display_name(self) -> None:
        return None

    @property
    def role(self) -> None:
        return None

    @property
    def is_admin(self) -> bool:
        return False


class AuthenticatedUserIdentity(DomainModel):
    """Caller presented a valid token for an existing account."""

    kind: Literal["authenticated_user"] = "authenticated_user"
    user_id: UserId
    display_name: str
    account_role: Role = Role.USER

    @property
    def role(self) -> Role:
        return self.account_role

    @property
    def is_admin(self) -> bool:
        return self.account_role is Role.ADMIN


class AdminByKeyIdentity(DomainModel):
    """Caller presented the shared admin key."""

    kind: Literal["admin_by_key"] = "admin_by_key"
    user_id: Optional[UserId] = None
    display_name: str

    @property
    def role(self) -> Role:
        return Role.ADMIN

    @property
    def is_admin(self) -> bool:
        return True

    @property
    def is_synthetic(self) -> bool:
        """True when no real admin account backs this identity."""
        return self.user_id is None


Identity = Annotated[
    Union[AnonymousIdentity, AuthenticatedUserIdentity, AdminByKeyIdentity],
    Field(discriminator="kind"),
]

ANONYMOUS = AnonymousIdentity()
