"""Unit tests for GetUserProfileUseCase."""

import pytest

from blog.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
)
from blog.domain.error import AuthenticationError, NotFoundError
from blog.domain.model.identity import ANONYMOUS, AdminByKeyIdentity
from blog.domain.repository import UserRepository
from blog.domain.service import PostService
from blog.domain.value import Role
from tests.conftest import identity_for, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestGetUserProfile:
    """Tests for GetUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_profile_with_posts_and_stats(self, unit_env):
        """Should return the account, its posts and totals over them."""
        # Arrange
        use_case = await unit_env.get(GetUserProfileUseCase)
        post_service = await unit_env.get(PostService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice"))
        identity = identity_for(user)
        post = await post_service.create_post(identity, "Hello", "World")
        newer = await post_service.create_post(identity, "Again", "Body")
        await post_service.add_comment(identity, post.id, "Self reply")
        await post_service.toggle_like(identity, newer.id)
        other = identity_for(await user_repo.save(make_user("bob")))
        await post_service.create_post(other, "Not mine", "Body")

        # Act
        response = await use_case.execute(GetUserProfileRequest(identity=identity))

        # Assert
        assert response.user_id == str(user.id)
        assert response.username == "alice"
        assert response.role is Role.USER
        liked = {p.post_id: p.liked for p in response.posts}
        assert liked == {str(newer.id): True, str(post.id): False}
        assert response.stats.total_posts == 2
        assert response.stats.total_comments == 1
        assert response.stats.total_likes == 1
        assert response.linkedin is None

    @pytest.mark.asyncio
    async def test_anonymous_is_unauthenticated(self, unit_env):
        """Anonymous callers have no profile."""
        # Arrange
        use_case = await unit_env.get(GetUserProfileUseCase)

        # Act & Assert
        with pytest.raises(AuthenticationError):
            await use_case.execute(GetUserProfileRequest(identity=ANONYMOUS))

    @pytest.mark.asyncio
    async def test_synthetic_admin_has_no_profile(self, unit_env):
        """The admin key without an account has nothing to show."""
        # Arrange
        use_case = await unit_env.get(GetUserProfileUseCase)
        admin = AdminByKeyIdentity(user_id=None, display_name="admin")

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(GetUserProfileRequest(identity=admin))
