"""Get user profile use case."""

from datetime import datetime

from pydantic import BaseModel

from blog.application.usecase.schema import PostSummary
from blog.domain.error import AuthenticationError, NotFoundError, ResolutionFailure
from blog.domain.model.identity import AdminByKeyIdentity, Identity
from blog.domain.service import PostService, UserService
from blog.domain.value import Role


class GetUserProfileRequest(BaseModel):
    """Get user profile request (for the calling user)."""

    identity: Identity


class UserStatsResponse(BaseModel):
    """Totals across the user's posts."""

    total_posts: int
    total_views: int
    total_likes: int
    total_comments: int


class GetUserProfileResponse(BaseModel):
    """Get user profile response."""

    user_id: str
    username: str
    email: str | None
    role: Role
    bio: str | None
    linkedin: str | None
    github: str | None
    avatar_url: str | None
    created_at: datetime
    posts: list[PostSummary]  # Newest first
    stats: UserStatsResponse


class GetUserProfileUseCase:
    """Use case for reading the caller's own profile, posts and stats."""

    def __init__(self, user_service: UserService, post_service: PostService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
            post_service: Post domain service, for the authored posts
        """
        self.user_service = user_service
        self.post_service = post_service

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Execute get user profile flow.

        Raises:
            AuthenticationError: If the caller is anonymous
            NotFoundError: If the identity has no account (synthetic admin)
        """
        identity = request.identity
        if identity.kind == "anonymous":
            raise AuthenticationError(
                ResolutionFailure.UNAUTHENTICATED, credentials_supplied=False
            )
        if isinstance(identity, AdminByKeyIdentity) and identity.is_synthetic:
            raise NotFoundError("user", "me")

        user = await self.user_service.get_by_id(identity.user_id)
        posts = await self.post_service.list_posts_by_author(user.id)
        stats = await self.user_service.get_stats(user.id)

        return GetUserProfileResponse(
            user_id=str(user.id),
            username=user.username,
            email=user.email,
            role=user.role,
            bio=user.bio,
            linkedin=user.linkedin,
            github=user.github,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            posts=[PostSummary.from_post(post, identity) for post in posts],
            stats=UserStatsResponse(**stats.model_dump()),
        )
