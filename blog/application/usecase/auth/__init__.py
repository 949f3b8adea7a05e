"""Auth use cases."""

from .resolve_identity import ResolveIdentityRequest, ResolveIdentityUseCase

__all__ = [
    "ResolveIdentityRequest",
    "ResolveIdentityUseCase",
]
