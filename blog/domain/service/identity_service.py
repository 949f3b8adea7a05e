"""Request identity resolution.

Turns the raw credentials of one request into a single ``Identity``. Two
trust paths exist and are kept apart:

1. A bearer token always wins. It must verify and must point at an
   existing account; otherwise resolution fails with ``INVALID_TOKEN``.
   Any admin key sent alongside a token is ignored.
2. Without a token, admin key candidates are compared in constant time
   against the configured secret. Every candidate must match. On success
   the caller acts as the configured admin account if it exists, or as a
   synthetic admin with no account otherwise.

With neither, the caller is anonymous where the route allows it.

Failures raise ``AuthenticationError``; the client-facing message never
says which path was attempted, and never hints at whether an admin
account or admin key is configured.
"""

import hmac
from uuid import UUID

import logfire

from blog.config import AuthSettings
from blog.domain.error import AuthenticationError, ResolutionFailure
from blog.domain.model.identity import (
    ANONYMOUS,
    AdminByKeyIdentity,
    AuthenticatedUserIdentity,
    Identity,
)
from blog.domain.repository import UserRepository
from blog.domain.value import Credentials, UserId
from blog.util.jwt import JWTError

from .base import Service
from .jwt_service import JWTService


class IdentityService(Service):
    """Domain service resolving request credentials to an identity."""

    def __init__(
        self,
        user_repository: UserRepository,
        jwt_service: JWTService,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize identity service.

        Args:
            user_repository: Account lookups by id and email
            jwt_service: Token verification
            auth_settings: Admin key and admin account configuration
        """
        self.user_repository = user_repository
        self.jwt_service = jwt_service
        self.auth_settings = auth_settings

    async def resolve(
        self, credentials: Credentials, allow_anonymous: bool = False
    ) -> Identity:
        """Resolve credentials to an identity.

        Args:
            credentials: Token and admin key candidates from the request
            allow_anonymous: Return an anonymous identity instead of failing
                when no credentials are present

        Returns:
            Resolved identity

        Raises:
            AuthenticationError: Invalid token, rejected admin key, or no
                credentials where an identity is required
            StoreUnavailableError: Account lookup failed
        """
        with logfire.span(
            "identity_service.resolve",
            has_token=credentials.has_token,
            admin_key_candidates=len(credentials.admin_keys),
        ):
            if credentials.bearer_token is not None:
                return await self._resolve_token(credentials.bearer_token)

            if credentials.has_admin_key:
                return await self._resolve_admin_key(credentials.admin_keys)

            if allow_anonymous:
                return ANONYMOUS

            logfire.info("No credentials presented")
            raise AuthenticationError(
                ResolutionFailure.UNAUTHENTICATED, credentials_supplied=False
            )

    async def resolve_optional(self, credentials: Credentials) -> Identity:
        """Resolve credentials for a read-only request.

        Invalid credentials degrade to an anonymous identity instead of
        failing, so a stale token never blocks public reads.
        """
        try:
            return await self.resolve(credentials, allow_anonymous=True)
        except AuthenticationError as e:
            logfire.debug(
                "Credentials rejected on public read, continuing anonymously",
                reason=e.reason.value,
            )
            return ANONYMOUS

    async def _resolve_token(self, token: str) -> AuthenticatedUserIdentity:
        try:
            payload = self.jwt_service.verify_token(token)
            user_id = UserId(UUID(payload.user_id))
        except (JWTError, ValueError):
            raise AuthenticationError(ResolutionFailure.INVALID_TOKEN)

        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            # Tokens must not outlive their account
            logfire.warn("Token refers to a missing account", user_id=str(user_id))
            raise AuthenticationError(ResolutionFailure.INVALID_TOKEN)

        logfire.info(
            "Identity resolved from token",
            user_id=str(user.id),
            role=user.role.value,
        )
        return AuthenticatedUserIdentity(
            user_id=user.id,
            display_name=user.username,
            account_role=user.role,
        )

    async def _resolve_admin_key(
        self, candidates: tuple[str, ...]
    ) -> AdminByKeyIdentity:
        if not self._admin_key_matches(candidates):
            logfire.warn("Admin key rejected")
            raise AuthenticationError(ResolutionFailure.UNAUTHENTICATED)

        admin = None
        if self.auth_settings.admin_email:
            admin = await self.user_repository.find_by_email(
                self.auth_settings.admin_email
            )

        if admin is None:
            logfire.info("Admin key accepted, acting as synthetic admin")
            return AdminByKeyIdentity(
                user_id=None, display_name=self.auth_settings.admin_username
            )

        logfire.info("Admin key accepted", user_id=str(admin.id))
        return AdminByKeyIdentity(user_id=admin.id, display_name=admin.username)

    def _admin_key_matches(self, candidates: tuple[str, ...]) -> bool:
        secret = self.auth_settings.admin_key
        if not secret or not candidates:
            return False

        expected = secret.encode("utf-8")
        # Compare every candidate so timing doesn't reveal which one failed
        results = [
            hmac.compare_digest(candidate.encode("utf-8"), expected)
            for candidate in candidates
        ]
        return all(results)
