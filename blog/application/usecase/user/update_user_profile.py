"""Update user profile use case."""

from datetime import datetime

from pydantic import BaseModel

from blog.domain.error import AuthenticationError, NotFoundError, ResolutionFailure
from blog.domain.model.identity import AdminByKeyIdentity, Identity
from blog.domain.service import UserService
from blog.domain.value import ProfilePatch


class UpdateUserProfileRequest(BaseModel):
    """Update user profile request. Unset fields are left unchanged."""

    identity: Identity
    username: str | None = None
    bio: str | None = None
    linkedin: str | None = None
    github: str | None = None


class UpdateUserProfileResponse(BaseModel):
    """Update user profile response."""

    user_id: str
    username: str
    bio: str | None
    linkedin: str | None
    github: str | None
    updated_at: datetime


class UpdateUserProfileUseCase:
    """Use case for editing the calling user's profile.

    Posts and comments keep the author name they were written under.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize update user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(
        self, request: UpdateUserProfileRequest
    ) -> UpdateUserProfileResponse:
        """Execute profile update flow.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the identity has no account
            ValidationError: If the username is blank or a field is too long
            ConflictError: If the username is taken
        """
        identity = request.identity
        if identity.kind == "anonymous":
            raise AuthenticationError(
                ResolutionFailure.UNAUTHENTICATED, credentials_supplied=False
            )
        if isinstance(identity, AdminByKeyIdentity) and identity.is_synthetic:
            raise NotFoundError("user", "me")

        patch = ProfilePatch(
            username=request.username,
            bio=request.bio,
            linkedin=request.linkedin,
            github=request.github,
        )
        user = await self.user_service.update_profile(identity.user_id, patch)
        return UpdateUserProfileResponse(
            user_id=str(user.id),
            username=user.username,
            bio=user.bio,
            linkedin=user.linkedin,
            github=user.github,
            updated_at=user.updated_at,
        )
