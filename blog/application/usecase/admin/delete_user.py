"""Delete user use case (admin)."""

from uuid import UUID

from pydantic import BaseModel

from blog.application.usecase.base import BaseUseCase
from blog.domain.model.identity import Identity
from blog.domain.service import AuthorizationPolicy, UserService
from blog.domain.value import UserId


class DeleteUserRequest(BaseModel):
    """Delete user request."""

    user_id: str
    identity: Identity  # Must be an admin


class DeleteUserResponse(BaseModel):
    """Delete user response."""

    user_id: str
    deleted: bool = True


class AdminDeleteUserUseCase(BaseUseCase[DeleteUserRequest, DeleteUserResponse]):
    """Use case for an admin removing an account.

    The account's posts and comments stay under their author name; its
    likes are withdrawn and its tokens stop working.
    """

    def __init__(
        self, user_service: UserService, authorization_policy: AuthorizationPolicy
    ) -> None:
        """Initialize admin delete user use case.

        Args:
            user_service: User domain service
            authorization_policy: Admin check
        """
        self.user_service = user_service
        self.authorization_policy = authorization_policy

    async def execute(self, request: DeleteUserRequest) -> DeleteUserResponse:
        """Execute admin delete user flow.

        Raises:
            NotAuthorizedError: If the caller is not an admin
            NotFoundError: If the user doesn't exist
        """
        self.authorization_policy.require_admin(request.identity, "users")
        await self.user_service.delete_user(UserId(UUID(request.user_id)))
        return DeleteUserResponse(user_id=request.user_id)
