"""PostgreSQL implementation of the view history repository."""

import logfire
from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.repository.view_history import ViewHistoryRepository
from blog.domain.value import PostId
from blog.persistence.repository._errors import translate_store_errors
from blog.persistence.tables import view_records_table


class PostgresViewHistoryRepository(ViewHistoryRepository):
    """Stores each client's window as rows ordered by ``seq``.

    The insert is ``ON CONFLICT DO NOTHING``, so two concurrent requests for
    the same client and post see exactly one successful record.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @translate_store_errors
    async def record_if_absent(
        self, client_token: str, post_id: PostId, limit: int
    ) -> bool:
        """Record a view and trim the window to the newest ``limit`` rows."""
        stmt = (
            pg_insert(view_records_table)
            .values(client_token=client_token, post_id=post_id)
            .on_conflict_do_nothing(index_elements=["client_token", "post_id"])
            .returning(view_records_table.c.seq)
        )
        result = await self.session.execute(stmt)
        if result.fetchone() is None:
            return False

        newest = (
            select(view_records_table.c.seq)
            .where(view_records_table.c.client_token == client_token)
            .order_by(view_records_table.c.seq.desc())
            .limit(limit)
        )
        evicted = await self.session.execute(
            delete(view_records_table).where(
                view_records_table.c.client_token == client_token,
                view_records_table.c.seq.not_in(newest),
            )
        )
        if evicted.rowcount:
            logfire.debug("Evicted view records", count=evicted.rowcount)

        await self.session.flush()
        return True
