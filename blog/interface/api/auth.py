"""Credential extraction for API routes.

Collects every credential a request carries without judging it; resolving
them to an identity is the identity service's job.

- ``Authorization: Bearer <jwt>``
- admin key candidates from the ``X-Admin-Key`` header, the ``adminKey``
  query parameter and the ``adminKey`` field of a JSON body
"""

import json

import logfire
from fastapi import Header, Query, Request

from blog.domain.value import Credentials

BEARER_PREFIX = "bearer "
ADMIN_KEY_FIELD = "adminKey"


def parse_bearer(authorization: str | None) -> str | None:
    """Return the token of a Bearer authorization header, if any."""
    if not authorization:
        return None
    if authorization[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        return None
    return authorization[len(BEARER_PREFIX) :].strip() or None


async def _admin_key_from_body(request: Request) -> str | None:
    if "application/json" not in request.headers.get("content-type", ""):
        return None

    body = await request.body()
    if not body:
        return None

    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        # Malformed bodies are rejected by request validation, not here
        logfire.debug("Request body is not JSON, no admin key read from it")
        return None

    if not isinstance(payload, dict):
        return None
    value = payload.get(ADMIN_KEY_FIELD)
    return value if isinstance(value, str) else None


async def get_credentials(
    request: Request,
    authorization: str | None = Header(default=None),
    x_admin_key: str | None = Header(default=None),
    admin_key: str | None = Query(default=None, alias=ADMIN_KEY_FIELD),
) -> Credentials:
    """FastAPI dependency returning the raw credentials of the request."""
    candidates = [x_admin_key, admin_key, await _admin_key_from_body(request)]
    return Credentials(
        bearer_token=parse_bearer(authorization),
        admin_keys=tuple(key for key in candidates if key is not None),
    )
