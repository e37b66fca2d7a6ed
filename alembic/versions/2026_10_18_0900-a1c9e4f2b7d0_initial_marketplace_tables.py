"""initial marketplace tables

Revision ID: a1c9e4f2b7d0
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "a1c9e4f2b7d0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema: directory, conversations, quotes, notifications, invites."""
    op.create_table(
        "profiles",
        _id_column(),
        sa.Column("full_name", sa.String(length=256), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_profiles_email", "profiles", ["email"], unique=False)

    op.create_table(
        "vendors",
        _id_column(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("business_name", sa.String(length=256), nullable=True),
        sa.Column(
            "is_published",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        *_timestamps(),
    )
    op.create_index("ix_vendors_user_id", "vendors", ["user_id"], unique=False)

    op.create_table(
        "conversations",
        _id_column(),
        sa.Column("couple_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("vendor_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "last_message_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        *_timestamps(),
        sa.UniqueConstraint(
            "couple_id", "vendor_id", name="uq_conversations_couple_vendor"
        ),
    )
    op.create_index(
        "ix_conversations_couple_id", "conversations", ["couple_id"], unique=False
    )
    op.create_index(
        "ix_conversations_vendor_id", "conversations", ["vendor_id"], unique=False
    )

    op.create_table(
        "messages",
        _id_column(),
        sa.Column("conversation_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sender_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("message_text", sa.Text(), nullable=False),
        sa.Column("quote_ref", sa.String(length=64), nullable=True),
        sa.Column(
            "read", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.ForeignKeyConstraint(
            ["conversation_id"], ["conversations.id"], ondelete="CASCADE"
        ),
    )
    op.create_index(
        "ix_messages_conversation_created",
        "messages",
        ["conversation_id", "created_at"],
        unique=False,
    )

    op.create_table(
        "quotes",
        _id_column(),
        sa.Column("quote_ref", sa.String(length=64), nullable=False),
        sa.Column("couple_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("vendor_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("package_id", sa.String(length=128), nullable=False),
        sa.Column("package_name", sa.String(length=256), nullable=True),
        sa.Column("pricing_mode", sa.String(length=32), nullable=True),
        sa.Column("guest_count", sa.Integer(), nullable=True),
        sa.Column("hours", sa.Numeric(8, 2), nullable=True),
        sa.Column(
            "base_from_price",
            sa.Numeric(12, 2),
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.Column(
            "add_ons",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("vendor_final_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("vendor_message", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.String(length=16),
            nullable=False,
            server_default=sa.text("'requested'"),
        ),
        *_timestamps(),
    )
    op.create_index("ix_quotes_quote_ref", "quotes", ["quote_ref"], unique=True)
    op.create_index("ix_quotes_couple_id", "quotes", ["couple_id"], unique=False)
    op.create_index("ix_quotes_vendor_id", "quotes", ["vendor_id"], unique=False)

    op.create_table(
        "notifications",
        _id_column(),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("body", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("link", sa.String(length=512), nullable=True),
        sa.Column(
            "is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column(
            "meta",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index(
        "ix_notifications_user_type_created",
        "notifications",
        ["user_id", "type", "created_at"],
        unique=False,
    )

    op.create_table(
        "conversions",
        _id_column(),
        sa.Column("quote_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("couple_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("vendor_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "amount", sa.Numeric(12, 2), nullable=False, server_default=sa.text("0")
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index("ix_conversions_quote_id", "conversions", ["quote_id"])
    op.create_index("ix_conversions_vendor_id", "conversions", ["vendor_id"])

    op.create_table(
        "beta_requests",
        _id_column(),
        sa.Column("name", sa.String(length=256), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role_interest", sa.String(length=16), nullable=True),
        sa.Column(
            "status",
            sa.String(length=16),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        sa.Column("invite_token", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("invite_token", name="uq_beta_requests_invite_token"),
    )
    op.create_index("ix_beta_requests_email", "beta_requests", ["email"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_beta_requests_email", table_name="beta_requests")
    op.drop_table("beta_requests")
    op.drop_index("ix_conversions_vendor_id", table_name="conversions")
    op.drop_index("ix_conversions_quote_id", table_name="conversions")
    op.drop_table("conversions")
    op.drop_index("ix_notifications_user_type_created", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_quotes_vendor_id", table_name="quotes")
    op.drop_index("ix_quotes_couple_id", table_name="quotes")
    op.drop_index("ix_quotes_quote_ref", table_name="quotes")
    op.drop_table("quotes")
    op.drop_index("ix_messages_conversation_created", table_name="messages")
    op.drop_table("messages")
    op.drop_index("ix_conversations_vendor_id", table_name="conversations")
    op.drop_index("ix_conversations_couple_id", table_name="conversations")
    op.drop_table("conversations")
    op.drop_index("ix_vendors_user_id", table_name="vendors")
    op.drop_table("vendors")
    op.drop_index("ix_profiles_email", table_name="profiles")
    op.drop_table("profiles")
