"""Unit tests for AdminDeleteUserUseCase."""

from uuid import uuid4

import pytest

from blog.application.usecase.admin import AdminDeleteUserUseCase, DeleteUserRequest
from blog.domain.error import (
    AuthenticationError,
    NotAuthorizedError,
    NotFoundError,
    ResolutionFailure,
)
from blog.domain.model.identity import AdminByKeyIdentity
from blog.domain.repository import UserRepository
from blog.domain.service import IdentityService, JWTService
from blog.domain.value import Credentials, Role
from tests.conftest import identity_for, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

ADMIN = AdminByKeyIdentity(user_id=None, display_name="admin")


class TestAdminDeleteUser:
    """Tests for AdminDeleteUserUseCase."""

    @pytest.mark.asyncio
    async def test_admin_deletes_account(self, unit_env):
        """The account is gone after deletion."""
        # Arrange
        use_case = await unit_env.get(AdminDeleteUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice"))

        # Act
        response = await use_case.execute(
            DeleteUserRequest(user_id=str(user.id), identity=ADMIN)
        )

        # Assert
        assert response.user_id == str(user.id)
        assert response.deleted is True
        assert await user_repo.find_by_id(user.id) is None

    @pytest.mark.asyncio
    async def test_existing_token_stops_resolving(self, unit_env):
        """A token issued before deletion resolves as an invalid token."""
        # Arrange
        use_case = await unit_env.get(AdminDeleteUserUseCase)
        identity_service = await unit_env.get(IdentityService)
        jwt_service = await unit_env.get(JWTService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice"))
        token = jwt_service.create_token(str(user.id))
        credentials = Credentials(bearer_token=token)
        assert (await identity_service.resolve(credentials)).user_id == user.id

        # Act
        await use_case.execute(DeleteUserRequest(user_id=str(user.id), identity=ADMIN))

        # Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(credentials)
        assert exc_info.value.reason is ResolutionFailure.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_regular_user_forbidden(self, unit_env):
        """Only admins may delete accounts, even their own."""
        # Arrange
        use_case = await unit_env.get(AdminDeleteUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice"))

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeleteUserRequest(user_id=str(user.id), identity=identity_for(user))
            )
        assert await user_repo.find_by_id(user.id) is not None

    @pytest.mark.asyncio
    async def test_admin_account_token_allowed(self, unit_env):
        """An admin account's token passes the admin check too."""
        # Arrange
        use_case = await unit_env.get(AdminDeleteUserUseCase)
        user_repo = await unit_env.get(UserRepository)
        admin = await user_repo.save(make_user("root", role=Role.ADMIN))
        user = await user_repo.save(make_user("alice"))

        # Act
        await use_case.execute(
            DeleteUserRequest(user_id=str(user.id), identity=identity_for(admin))
        )

        # Assert
        assert await user_repo.find_by_id(user.id) is None

    @pytest.mark.asyncio
    async def test_missing_account_not_found(self, unit_env):
        """Deleting an unknown id is NotFound."""
        # Arrange
        use_case = await unit_env.get(AdminDeleteUserUseCase)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                DeleteUserRequest(user_id=str(uuid4()), identity=ADMIN)
            )
