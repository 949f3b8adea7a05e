"""Unit tests for UpdateUserProfileUseCase."""

import pytest

from blog.application.usecase.user import UpdateUserProfileUseCase
from blog.application.usecase.user.update_user_profile import UpdateUserProfileRequest
from blog.domain.error import AuthenticationError, NotFoundError, ValidationError
from blog.domain.model.identity import ANONYMOUS, AdminByKeyIdentity
from blog.domain.repository import UserRepository
from tests.conftest import identity_for, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdateUserProfileUseCase:
    """Tests for UpdateUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_update_username_success(self, unit_env):
        """Renaming the caller's account should succeed."""
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(UpdateUserProfileUseCase)
        user = await user_repo.save(make_user("alice"))

        # Act
        response = await use_case.execute(
            UpdateUserProfileRequest(identity=identity_for(user), username="alicia")
        )

        # Assert
        assert response.user_id == str(user.id)
        assert response.username == "alicia"
        assert response.updated_at >= user.updated_at

    @pytest.mark.asyncio
    async def test_update_profile_links_only(self, unit_env):
        """Fields left out of the request keep their values."""
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(UpdateUserProfileUseCase)
        user = await user_repo.save(make_user("alice"))

        # Act
        response = await use_case.execute(
            UpdateUserProfileRequest(
                identity=identity_for(user),
                bio="Backend developer",
                github="https://github.com/alice",
            )
        )

        # Assert
        assert response.username == "alice"
        assert response.bio == "Backend developer"
        assert response.github == "https://github.com/alice"
        assert response.linkedin is None

    @pytest.mark.asyncio
    async def test_update_username_empty_fails(self, unit_env):
        """Blank usernames should be rejected."""
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(UpdateUserProfileUseCase)
        user = await user_repo.save(make_user("alice"))

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                UpdateUserProfileRequest(identity=identity_for(user), username=" ")
            )

    @pytest.mark.asyncio
    async def test_update_anonymous_fails(self, unit_env):
        """Anonymous callers have no profile to update."""
        # Arrange
        use_case = await unit_env.get(UpdateUserProfileUseCase)

        # Act & Assert
        with pytest.raises(AuthenticationError):
            await use_case.execute(
                UpdateUserProfileRequest(identity=ANONYMOUS, username="ghost")
            )

    @pytest.mark.asyncio
    async def test_update_synthetic_admin_fails(self, unit_env):
        """The admin key without an account cannot be renamed."""
        # Arrange
        use_case = await unit_env.get(UpdateUserProfileUseCase)
        admin = AdminByKeyIdentity(user_id=None, display_name="admin")

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                UpdateUserProfileRequest(identity=admin, username="boss")
            )
