"""Domain services."""

from .authorization import Action, AuthorizationPolicy, Ownable
from .base import Service
from .identity_service import IdentityService
from .jwt_service import JWTService
from .post_service import PostService
from .user_service import UserService, UserStats
from .view_deduplicator import ViewDeduplicator

__all__ = [
    "Action",
    "AuthorizationPolicy",
    "IdentityService",
    "JWTService",
    "Ownable",
    "PostService",
    "Service",
    "UserService",
    "UserStats",
    "ViewDeduplicator",
]
