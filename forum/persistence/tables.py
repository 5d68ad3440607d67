"""SQLAlchemy table definitions for the forum user aggregate.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    func,
    text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("login", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("password_hash", String(255), nullable=True),  # NULL for OAuth-only users
    Column("guest", Boolean, nullable=False, server_default="false"),
    Column("name", String(255), nullable=True),
    Column("location", String(255), nullable=True),
    Column("bio", Text, nullable=True),
    Column("website", String(255), nullable=True),
    Column("github", String(255), nullable=True),
    Column("tagline", String(255), nullable=True),
    Column("verified", Boolean, nullable=False, server_default="true"),
    Column("state", Integer, nullable=False, server_default="1"),  # UserState
    Column("topics_count", Integer, nullable=False, server_default="0"),
    Column("replies_count", Integer, nullable=False, server_default="0"),
    Column("likes_count", Integer, nullable=False, server_default="0"),
    Column("reset_password_token", String(255), nullable=True),
    Column("reset_password_sent_at", TIMESTAMP(timezone=True), nullable=True),
    Column("remember_created_at", TIMESTAMP(timezone=True), nullable=True),
    Column("sign_in_count", Integer, nullable=False, server_default="0"),
    Column("current_sign_in_at", TIMESTAMP(timezone=True), nullable=True),
    Column("last_sign_in_at", TIMESTAMP(timezone=True), nullable=True),
    Column("current_sign_in_ip", String(64), nullable=True),
    Column("last_sign_in_ip", String(64), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("state IN (-1, 1, 2)", name="user_state_valid"),
    CheckConstraint(
        "topics_count >= 0 AND replies_count >= 0 AND likes_count >= 0",
        name="user_counters_non_negative",
    ),
)

# Case-insensitive uniqueness among live accounts; soft-deleted rows
# (state -1) all share the same login
Index(
    "uq_users_login_lower",
    func.lower(users_table.c.login),
    unique=True,
    postgresql_where=text("state <> -1"),
)
Index(
    "uq_users_email_lower",
    func.lower(users_table.c.email),
    unique=True,
    postgresql_where=text("state <> -1"),
)
Index("idx_users_location", users_table.c.location)
Index("idx_users_reset_password_token", users_table.c.reset_password_token)
Index(
    "idx_users_hot",
    users_table.c.replies_count.desc(),
    users_table.c.topics_count.desc(),
)

# ============================================================================
# AUTHORIZATIONS TABLE (embedded in User, deleted with it)
# ============================================================================
authorizations_table = Table(
    "authorizations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("provider", String(50), nullable=False),  # 'github', 'twitter', ...
    Column("uid", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Not unique: binding the same identity twice keeps both rows
Index("idx_authorizations_user_id", authorizations_table.c.user_id)
Index(
    "idx_authorizations_provider_uid",
    authorizations_table.c.provider,
    authorizations_table.c.uid,
)

# ============================================================================
# USER_FOLLOWS TABLE (read as following by follower_id, followers by followee_id)
# ============================================================================
user_follows_table = Table(
    "user_follows",
    metadata,
    Column(
        "follower_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "followee_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("follower_id", "followee_id", name="pk_user_follows"),
)

Index("idx_user_follows_followee_id", user_follows_table.c.followee_id)

# ============================================================================
# NODE_FOLLOWS TABLE (nodes are owned by the content module, no FK)
# ============================================================================
node_follows_table = Table(
    "node_follows",
    metadata,
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("node_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("user_id", "node_id", name="pk_node_follows"),
)

Index("idx_node_follows_node_id", node_follows_table.c.node_id)

# ============================================================================
# LIKES TABLE (orphaned, not cascaded, when a user row goes away)
# ============================================================================
likes_table = Table(
    "likes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, nullable=False),
    Column(
        "likeable_type",
        postgresql.ENUM(
            "topic", "reply", "post", "photo", name="likeable_type", create_type=False
        ),
        nullable=False,
    ),
    Column("likeable_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_likes_user_likeable",
    likes_table.c.user_id,
    likes_table.c.likeable_type,
    likes_table.c.likeable_id,
)

# ============================================================================
# NOTIFICATIONS TABLE (bulk-deleted with the user)
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "notifiable_type",
        postgresql.ENUM(
            "topic", "reply", "mention", name="notifiable_type", create_type=False
        ),
        nullable=False,
    ),
    Column("notifiable_id", UUID, nullable=False),
    Column("read", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_notifications_user_id_read",
    notifications_table.c.user_id,
    notifications_table.c.read,
)

# ============================================================================
# USER_LOCATIONS TABLE (materialized location aggregation)
# ============================================================================
user_locations_table = Table(
    "user_locations",
    metadata,
    Column("location", String(255), primary_key=True),
    Column("count", Integer, nullable=False),
    Column(
        "sample_logins",
        postgresql.ARRAY(String(255)),
        nullable=False,
        server_default="{}",
    ),
)
