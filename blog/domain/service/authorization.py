"""Authorization policy shared by posts and comments."""

from enum import Enum
from typing import Optional, Protocol

from blog.domain.error import NotAuthorizedError
from blog.domain.model.identity import Identity
from blog.domain.value import UserId

from .base import Service


class Action(str, Enum):
    """Gated actions."""

    UPDATE = "update"
    DELETE = "delete"
    TOGGLE_LIKE = "toggle_like"


class Ownable(Protocol):
    """Anything with an author, such as a post or a comment."""

    @property
    def author_id(self) -> Optional[UserId]: ...


class AuthorizationPolicy(Service):
    """Decides whether an identity may perform an action on an entity.

    Rules:
    - anonymous identities may do nothing
    - liking needs a real account but is not ownership-gated
    - admins may update and delete anything
    - regular users may update and delete what they authored

    A synthetic admin (admin key without an account) passes admin checks
    but never owns anything and cannot like, since it has no user id.
    """

    def can_perform(
        self, identity: Identity, action: Action, entity: Optional[Ownable] = None
    ) -> bool:
        """Pure allow/deny decision."""
        if identity.kind == "anonymous":
            return False

        if action is Action.TOGGLE_LIKE:
            return identity.user_id is not None

        if identity.is_admin:
            return True

        return self.is_owner(identity, entity)

    @staticmethod
    def is_owner(identity: Identity, entity: Optional[Ownable]) -> bool:
        """Compare ids as strings so UUIDs and raw strings agree."""
        if entity is None or entity.author_id is None or identity.user_id is None:
            return False
        return str(entity.author_id) == str(identity.user_id)

    def require(
        self,
        identity: Identity,
        action: Action,
        entity: Optional[Ownable],
        resource: str,
        resource_id: str,
    ) -> None:
        """Raise unless the action is allowed.

        Raises:
            NotAuthorizedError: If the policy denies the action
        """
        if not self.can_perform(identity, action, entity):
            raise NotAuthorizedError(resource, resource_id, _user_label(identity))

    def require_admin(self, identity: Identity, resource: str) -> None:
        """Raise unless the identity has the admin role.

        Raises:
            NotAuthorizedError: For non-admin identities
        """
        if not identity.is_admin:
            raise NotAuthorizedError(resource, "*", _user_label(identity))


def _user_label(identity: Identity) -> Optional[str]:
    return str(identity.user_id) if identity.user_id is not None else None
