"""Unit tests for IdentityService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from blog.config import AuthSettings
from blog.domain.error import AuthenticationError, ResolutionFailure
from blog.domain.model.identity import AdminByKeyIdentity, AuthenticatedUserIdentity
from blog.domain.repository import UserRepository
from blog.domain.service import IdentityService, JWTService
from blog.domain.value import Credentials, Role
from blog.util.jwt import create_token
from tests.conftest import make_user
from tests.di import make_test_settings
from tests.di.core import TEST_ADMIN_KEY
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()
no_admin_key_env = create_env_fixture(settings=make_test_settings(admin_key=None))


class TestResolveWithoutCredentials:
    """Requests carrying neither a token nor an admin key."""

    @pytest.mark.asyncio
    async def test_anonymous_when_allowed(self, unit_env):
        """Should resolve to the anonymous identity."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)

        # Act
        identity = await identity_service.resolve(Credentials(), allow_anonymous=True)

        # Assert
        assert identity.kind == "anonymous"
        assert identity.user_id is None
        assert identity.role is None

    @pytest.mark.asyncio
    async def test_fails_when_identity_required(self, unit_env):
        """Should fail as unauthenticated without hinting at any credential."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(Credentials())

        assert exc_info.value.reason is ResolutionFailure.UNAUTHENTICATED
        assert str(exc_info.value) == "Authentication required"

    @pytest.mark.asyncio
    async def test_blank_values_count_as_absent(self, unit_env):
        """Blank token and empty admin keys should be ignored."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        credentials = Credentials(bearer_token="   ", admin_keys=("",))

        # Act
        identity = await identity_service.resolve(credentials, allow_anonymous=True)

        # Assert
        assert identity.kind == "anonymous"


class TestResolveBearerToken:
    """Token path."""

    @pytest.mark.asyncio
    async def test_valid_token_resolves_account(self, unit_env):
        """Should resolve to the token's account with its stored role."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        jwt_service = await unit_env.get(JWTService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice"))
        token = jwt_service.create_token(str(user.id))

        # Act
        identity = await identity_service.resolve(Credentials(bearer_token=token))

        # Assert
        assert isinstance(identity, AuthenticatedUserIdentity)
        assert identity.user_id == user.id
        assert identity.display_name == "alice"
        assert identity.role is Role.USER
        assert not identity.is_admin

    @pytest.mark.asyncio
    async def test_admin_account_token_is_admin(self, unit_env):
        """A token for an admin account should carry the admin role."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        jwt_service = await unit_env.get(JWTService)
        user_repo = await unit_env.get(UserRepository)
        admin = await user_repo.save(make_user("root", role=Role.ADMIN))
        token = jwt_service.create_token(str(admin.id))

        # Act
        identity = await identity_service.resolve(Credentials(bearer_token=token))

        # Assert
        assert identity.kind == "authenticated_user"
        assert identity.is_admin

    @pytest.mark.asyncio
    async def test_garbage_token_is_invalid(self, unit_env):
        """An undecodable token should fail with INVALID_TOKEN."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(Credentials(bearer_token="not-a-jwt"))

        assert exc_info.value.reason is ResolutionFailure.INVALID_TOKEN
        assert str(exc_info.value) == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_expired_token_is_invalid(self, unit_env):
        """An expired token should fail even if the account exists."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        auth_settings = await unit_env.get(AuthSettings)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice"))
        token = create_token(
            str(user.id), auth_settings, expires_in=timedelta(seconds=-10)
        )

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(Credentials(bearer_token=token))

        assert exc_info.value.reason is ResolutionFailure.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_token_signed_with_other_secret_is_invalid(self, unit_env):
        """A token signed with a different secret should be rejected."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice"))
        token = create_token(str(user.id), AuthSettings(jwt_secret="other-secret"))

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(Credentials(bearer_token=token))

        assert exc_info.value.reason is ResolutionFailure.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_token_for_missing_account_is_invalid(self, unit_env):
        """A well-signed token whose account is gone should be rejected."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        jwt_service = await unit_env.get(JWTService)
        token = jwt_service.create_token(str(uuid4()))

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(Credentials(bearer_token=token))

        assert exc_info.value.reason is ResolutionFailure.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_token_with_non_uuid_subject_is_invalid(self, unit_env):
        """A token whose user_id is not a UUID should be rejected."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        jwt_service = await unit_env.get(JWTService)
        token = jwt_service.create_token("not-a-uuid")

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(Credentials(bearer_token=token))

        assert exc_info.value.reason is ResolutionFailure.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_token_wins_over_admin_key(self, unit_env):
        """With both present, the admin key should be ignored entirely."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        jwt_service = await unit_env.get(JWTService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice"))
        token = jwt_service.create_token(str(user.id))

        # Act
        identity = await identity_service.resolve(
            Credentials(bearer_token=token, admin_keys=(TEST_ADMIN_KEY,))
        )

        # Assert
        assert identity.kind == "authenticated_user"
        assert not identity.is_admin

    @pytest.mark.asyncio
    async def test_invalid_token_not_rescued_by_admin_key(self, unit_env):
        """A bad token fails even when a correct admin key is present."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(
                Credentials(bearer_token="bad", admin_keys=(TEST_ADMIN_KEY,))
            )

        assert exc_info.value.reason is ResolutionFailure.INVALID_TOKEN


class TestResolveAdminKey:
    """Admin key path."""

    @pytest.mark.asyncio
    async def test_key_acts_as_configured_admin_account(self, unit_env):
        """Should act as the account matching the configured admin email."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        admin = await user_repo.save(
            make_user("root", role=Role.ADMIN, email="Admin@Example.com")
        )

        # Act
        identity = await identity_service.resolve(
            Credentials(admin_keys=(TEST_ADMIN_KEY,))
        )

        # Assert
        assert isinstance(identity, AdminByKeyIdentity)
        assert identity.user_id == admin.id
        assert identity.display_name == "root"
        assert identity.is_admin
        assert not identity.is_synthetic

    @pytest.mark.asyncio
    async def test_key_without_admin_account_is_synthetic(self, unit_env):
        """Should yield an admin with no account when none matches."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)

        # Act
        identity = await identity_service.resolve(
            Credentials(admin_keys=(TEST_ADMIN_KEY,))
        )

        # Assert
        assert identity.kind == "admin_by_key"
        assert identity.user_id is None
        assert identity.display_name == "admin"
        assert identity.role is Role.ADMIN

    @pytest.mark.asyncio
    async def test_all_candidates_must_match(self, unit_env):
        """One wrong candidate should reject the request."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(
                Credentials(admin_keys=(TEST_ADMIN_KEY, "wrong-key"))
            )

        assert exc_info.value.reason is ResolutionFailure.UNAUTHENTICATED
        assert str(exc_info.value) == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_matching_candidates_from_several_sources(self, unit_env):
        """Several identical candidates should be accepted."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)

        # Act
        identity = await identity_service.resolve(
            Credentials(admin_keys=(TEST_ADMIN_KEY, TEST_ADMIN_KEY))
        )

        # Assert
        assert identity.is_admin

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "near_miss",
        [
            TEST_ADMIN_KEY[:-1],
            TEST_ADMIN_KEY + "x",
            TEST_ADMIN_KEY[:-1] + chr(ord(TEST_ADMIN_KEY[-1]) ^ 1),
            " " + TEST_ADMIN_KEY,
        ],
        ids=["truncated", "extended", "last_char_flipped", "leading_space"],
    )
    async def test_key_off_by_one_character_fails(self, unit_env, near_miss):
        """Only an exact match is accepted."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(Credentials(admin_keys=(near_miss,)))

        assert exc_info.value.reason is ResolutionFailure.UNAUTHENTICATED
        assert str(exc_info.value) == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_wrong_key_fails_even_if_anonymous_allowed(self, unit_env):
        """A rejected key is an error, not a fallback to anonymous."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)

        # Act & Assert
        with pytest.raises(AuthenticationError):
            await identity_service.resolve(
                Credentials(admin_keys=("wrong-key",)), allow_anonymous=True
            )

    @pytest.mark.asyncio
    async def test_key_rejected_when_no_key_configured(self, no_admin_key_env):
        """Without a configured secret every key should be rejected."""
        # Arrange
        identity_service = await no_admin_key_env.get(IdentityService)

        # Act & Assert
        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.resolve(Credentials(admin_keys=(TEST_ADMIN_KEY,)))

        assert str(exc_info.value) == "Invalid credentials"


class TestResolveOptional:
    """Public reads degrade bad credentials to anonymous."""

    @pytest.mark.asyncio
    async def test_invalid_token_becomes_anonymous(self, unit_env):
        """Should return anonymous instead of raising."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)

        # Act
        identity = await identity_service.resolve_optional(
            Credentials(bearer_token="not-a-jwt")
        )

        # Assert
        assert identity.kind == "anonymous"

    @pytest.mark.asyncio
    async def test_valid_token_still_resolves(self, unit_env):
        """Valid credentials should resolve normally."""
        # Arrange
        identity_service = await unit_env.get(IdentityService)
        jwt_service = await unit_env.get(JWTService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice"))

        # Act
        identity = await identity_service.resolve_optional(
            Credentials(bearer_token=jwt_service.create_token(str(user.id)))
        )

        # Assert
        assert identity.user_id == user.id
