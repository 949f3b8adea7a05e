"""Resolve identity use case."""

from pydantic import BaseModel

from blog.domain.model.identity import Identity
from blog.domain.service import IdentityService
from blog.domain.value import Credentials


class ResolveIdentityRequest(BaseModel):
    """Resolve identity request.

    ``optional`` is for public reads: bad credentials degrade to anonymous
    instead of failing the request.
    """

    credentials: Credentials
    optional: bool = False


class ResolveIdentityUseCase:
    """Use case for turning request credentials into an identity."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize resolve identity use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: ResolveIdentityRequest) -> Identity:
        """Execute identity resolution.

        Returns:
            Resolved identity (possibly anonymous when optional)

        Raises:
            AuthenticationError: If credentials are missing or invalid and the
                request is not optional
        """
        if request.optional:
            return await self.identity_service.resolve_optional(request.credentials)
        return await self.identity_service.resolve(request.credentials)
