"""List users use case (admin)."""

from datetime import datetime

from pydantic import BaseModel, Field

from blog.domain.model.identity import Identity
from blog.domain.service import AuthorizationPolicy, UserService
from blog.domain.value import Role


class ListUsersRequest(BaseModel):
    """List users request."""

    identity: Identity  # Must be an admin
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class UserListItem(BaseModel):
    """User list item in response."""

    user_id: str
    username: str
    email: str | None
    role: Role
    created_at: datetime


class ListUsersResponse(BaseModel):
    """List users response."""

    users: list[UserListItem]
    limit: int
    offset: int


class ListUsersUseCase:
    """Use case for listing every account."""

    def __init__(
        self, user_service: UserService, authorization_policy: AuthorizationPolicy
    ) -> None:
        """Initialize list users use case.

        Args:
            user_service: User domain service
            authorization_policy: Admin check
        """
        self.user_service = user_service
        self.authorization_policy = authorization_policy

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        """Execute list users flow.

        Raises:
            NotAuthorizedError: If the caller is not an admin
        """
        self.authorization_policy.require_admin(request.identity, "users")

        users = await self.user_service.list_users(
            limit=request.limit, offset=request.offset
        )
        return ListUsersResponse(
            users=[
                UserListItem(
                    user_id=str(user.id),
                    username=user.username,
                    email=user.email,
                    role=user.role,
                    created_at=user.created_at,
                )
                for user in users
            ],
            limit=request.limit,
            offset=request.offset,
        )
