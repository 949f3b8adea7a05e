"""SQLAlchemy table definitions for the blog.

The Post aggregate is spread over four tables so that each kind of change
is a single-row statement: likes are rows in ``post_likes``, comments are
rows in ``comments`` ordered by ``seq``, and views are a counter column.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    ForeignKey,
    Identity,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(50), nullable=False, unique=True),
    Column("email", String(255), nullable=True),
    Column("role", String(20), nullable=False, server_default="user"),
    Column("bio", Text, nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("linkedin", String(255), nullable=True),
    Column("github", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("role IN ('user', 'admin')", name="users_role_valid"),
)

Index("idx_users_email_lower", func.lower(users_table.c.email), unique=True)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", Text, nullable=False),
    Column("content", Text, nullable=False),
    Column("categories", ARRAY(String(100)), nullable=False, server_default="{}"),
    Column("slug", String(100), nullable=True, unique=True),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("author_name", String(50), nullable=False),  # Snapshot at creation
    Column("views", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("views >= 0", name="posts_views_non_negative"),
    CheckConstraint("updated_at >= created_at", name="posts_updated_after_created"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_categories", posts_table.c.categories, postgresql_using="gin")

# ============================================================================
# POST_LIKES TABLE (one row per user per liked post)
# ============================================================================
post_likes_table = Table(
    "post_likes",
    metadata,
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("post_id", "user_id", name="pk_post_likes"),
)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    # Display order within a post
    Column("seq", BigInteger, Identity(always=True), nullable=False, unique=True),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("author_name", String(50), nullable=False),  # Snapshot at creation
    Column("content", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_post_id_seq", comments_table.c.post_id, comments_table.c.seq)

# ============================================================================
# VIEW_RECORDS TABLE (per-client dedup window)
# ============================================================================
view_records_table = Table(
    "view_records",
    metadata,
    Column("client_token", String(64), nullable=False),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    # Insertion order, used for FIFO eviction
    Column("seq", BigInteger, Identity(always=True), nullable=False),
    Column(
        "viewed_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("client_token", "post_id", name="pk_view_records"),
)

Index(
    "idx_view_records_client_seq",
    view_records_table.c.client_token,
    view_records_table.c.seq,
)
