"""initial_schema

Create the schema for the forum user aggregate:
- Users (credentials, profile, counters, lifecycle state, sign-in tracking)
- Authorizations (external identities bound to a user)
- User follows and node follows
- Likes (polymorphic target)
- Notifications
- User locations (materialized location popularity)

Revision ID: 3c1f0e9a7b42
Revises:
Create Date: 2026-10-17 10:12:44.301852

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0e9a7b42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE likeable_type AS ENUM ('topic', 'reply', 'post', 'photo');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE notifiable_type AS ENUM ('topic', 'reply', 'mention');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("login", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("guest", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("website", sa.String(255), nullable=True),
        sa.Column("github", sa.String(255), nullable=True),
        sa.Column("tagline", sa.String(255), nullable=True),
        sa.Column("verified", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("state", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("topics_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("replies_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reset_password_token", sa.String(255), nullable=True),
        sa.Column(
            "reset_password_sent_at", sa.TIMESTAMP(timezone=True), nullable=True
        ),
        sa.Column("remember_created_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("sign_in_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("current_sign_in_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("last_sign_in_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("current_sign_in_ip", sa.String(64), nullable=True),
        sa.Column("last_sign_in_ip", sa.String(64), nullable=True),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("state IN (-1, 1, 2)", name="user_state_valid"),
        sa.CheckConstraint(
            "topics_count >= 0 AND replies_count >= 0 AND likes_count >= 0",
            name="user_counters_non_negative",
        ),
    )
    op.create_index(
        "uq_users_login_lower",
        "users",
        [sa.text("lower(login)")],
        unique=True,
        postgresql_where=sa.text("state <> -1"),
    )
    op.create_index(
        "uq_users_email_lower",
        "users",
        [sa.text("lower(email)")],
        unique=True,
        postgresql_where=sa.text("state <> -1"),
    )
    op.create_index("idx_users_location", "users", ["location"])
    op.create_index(
        "idx_users_reset_password_token", "users", ["reset_password_token"]
    )
    op.create_index(
        "idx_users_hot",
        "users",
        [sa.text("replies_count DESC"), sa.text("topics_count DESC")],
    )

    # ========================================================================
    # AUTHORIZATIONS table (duplicates allowed)
    # ========================================================================
    op.create_table(
        "authorizations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("uid", sa.String(255), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_authorizations_user_id", "authorizations", ["user_id"])
    op.create_index(
        "idx_authorizations_provider_uid", "authorizations", ["provider", "uid"]
    )

    # ========================================================================
    # USER_FOLLOWS table
    # ========================================================================
    op.create_table(
        "user_follows",
        sa.Column("follower_id", sa.UUID(), nullable=False),
        sa.Column("followee_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["follower_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["followee_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("follower_id", "followee_id", name="pk_user_follows"),
    )
    op.create_index("idx_user_follows_followee_id", "user_follows", ["followee_id"])

    # ========================================================================
    # NODE_FOLLOWS table
    # ========================================================================
    op.create_table(
        "node_follows",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("node_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "node_id", name="pk_node_follows"),
    )
    op.create_index("idx_node_follows_node_id", "node_follows", ["node_id"])

    # ========================================================================
    # LIKES table (no FK: likes outlive their user row)
    # ========================================================================
    op.create_table(
        "likes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "likeable_type",
            postgresql.ENUM(
                "topic",
                "reply",
                "post",
                "photo",
                name="likeable_type",
                create_type=False,
            ),
            nullable=False,
        ),
        sa.Column("likeable_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_likes_user_likeable",
        "likes",
        ["user_id", "likeable_type", "likeable_id"],
    )

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "notifiable_type",
            postgresql.ENUM(
                "topic",
                "reply",
                "mention",
                name="notifiable_type",
                create_type=False,
            ),
            nullable=False,
        ),
        sa.Column("notifiable_id", sa.UUID(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default="false"),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_user_id_read", "notifications", ["user_id", "read"]
    )

    # ========================================================================
    # USER_LOCATIONS table
    # ========================================================================
    op.create_table(
        "user_locations",
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False),
        sa.Column(
            "sample_logins",
            postgresql.ARRAY(sa.String(255)),
            nullable=False,
            server_default="{}",
        ),
        sa.PrimaryKeyConstraint("location"),
    )

    # Trigger function to keep users.updated_at current
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ language 'plpgsql';
    """)

    op.execute("""
        CREATE TRIGGER update_users_updated_at BEFORE UPDATE ON users
        FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS update_users_updated_at ON users")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("user_locations")
    op.drop_table("notifications")
    op.drop_table("likes")
    op.drop_table("node_follows")
    op.drop_table("user_follows")
    op.drop_table("authorizations")
    op.drop_table("users")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS notifiable_type")
    op.execute("DROP TYPE IF EXISTS likeable_type")
