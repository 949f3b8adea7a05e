"""PostgreSQL implementation of User repository."""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.error import ConflictError
from blog.domain.model import User
from blog.domain.model.common import utc_now
from blog.domain.repository import UserRepository
from blog.domain.repository.user import PROFILE_FIELDS
from blog.domain.value import UserId
from blog.persistence.mappers import row_to_user, user_to_dict
from blog.persistence.repository._errors import translate_store_errors
from blog.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @translate_store_errors
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    @translate_store_errors
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, ignoring case.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(
            func.lower(users_table.c.email) == email.strip().lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    @translate_store_errors
    async def find_all(self, limit: int = 50, offset: int = 0) -> List[User]:
        """List users, oldest account first."""
        stmt = (
            select(users_table)
            .order_by(users_table.c.created_at, users_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    @translate_store_errors
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        user_dict = user_to_dict(user)
        stmt = pg_insert(users_table).values(**user_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={key: value for key, value in user_dict.items() if key != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user

    @translate_store_errors
    async def update_profile(
        self, user_id: UserId, fields: Dict[str, Any]
    ) -> Optional[User]:
        """Overwrite the given profile fields.

        Args:
            user_id: User to update
            fields: Profile columns and their new values

        Returns:
            The updated user, or None if it doesn't exist

        Raises:
            ConflictError: If the username is taken
        """
        unknown = set(fields) - PROFILE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(**fields, updated_at=utc_now())
            .returning(users_table)
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().first()
        except IntegrityError as e:
            raise ConflictError(
                f"Username '{fields.get('username')}' is already taken"
            ) from e

        return row_to_user(dict(row)) if row else None

    @translate_store_errors
    async def delete(self, user_id: UserId) -> bool:
        """Delete an account. Likes cascade; authored content is kept."""
        stmt = (
            delete(users_table)
            .where(users_table.c.id == user_id)
            .returning(users_table.c.id)
        )
        result = await self.session.execute(stmt)
        deleted = result.fetchone() is not None
        await self.session.flush()
        return deleted
