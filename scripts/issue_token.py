#!/usr/bin/env python3
"""Issue a bearer token for an existing account.

Accounts are provisioned outside this service, so operators use this to
hand out tokens:

    python scripts/issue_token.py alice@example.com
    python scripts/issue_token.py 0b6f3c1e-... --days 1
"""

import argparse
import asyncio
import sys
from datetime import timedelta
from uuid import UUID

import logfire

from blog.config import Settings
from blog.domain.service import JWTService
from blog.domain.value import UserId
from blog.persistence.database import create_engine, create_session_factory
from blog.persistence.repository import PostgresUserRepository
from blog.util.observability import configure_logfire


async def issue(settings: Settings, account: str, days: int | None) -> str | None:
    """Look the account up by id or email and sign a token for it."""
    engine = create_engine(settings)
    try:
        async with create_session_factory(engine)() as session:
            repository = PostgresUserRepository(session)
            try:
                user = await repository.find_by_id(UserId(UUID(account)))
            except ValueError:
                user = await repository.find_by_email(account)
    finally:
        await engine.dispose()

    if user is None:
        return None

    expires_in = timedelta(days=days) if days else None
    jwt_service = JWTService(settings.auth)
    token = jwt_service.create_token(str(user.id), expires_in=expires_in)
    logfire.info("Token issued", user_id=str(user.id))
    return token


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("account", help="User id or email")
    parser.add_argument("--days", type=int, default=None, help="Token lifetime")
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)

    token = asyncio.run(issue(settings, args.account, args.days))
    if token is None:
        print(f"No account found for {args.account}", file=sys.stderr)
        return 1

    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
