"""JWT token domain service."""

from datetime import timedelta

import logfire

from blog.config import AuthSettings
from blog.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, expires_in: timedelta | None = None) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            expires_in: Lifetime override (defaults to ``jwt_expiry_days``)

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, self.auth_settings, expires_in=expires_in)
            logfire.info("JWT token created", user_id=user_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            logfire.debug("JWT token verified", user_id=payload.user_id)
            return payload
