"""users and oauth_identities

Revision ID: 3f2c9d41a7b0
Revises:
Create Date: 2026-10-18 09:12:44.518203

"""

from typing import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "3f2c9d41a7b0"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

TOUCHED_TABLES = ("users", "oauth_identities")


def _id() -> sa.Column:
    return sa.Column(
        "id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")
    )


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            name,
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        )
        for name in ("created_at", "updated_at")
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("nickname", sa.String(255)),
        sa.Column("email", sa.String(255)),
        sa.Column("avatar_url", sa.Text()),
        *_timestamps(),
    )
    op.create_index("idx_users_email", "users", ["email"])

    op.create_table(
        "oauth_identities",
        _id(),
        sa.Column(
            "user_id",
            sa.UUID(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("provider_user_id", sa.String(255), nullable=False),
        sa.Column("access_token", sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "provider", "provider_user_id", name="uq_oauth_identities_provider_user"
        ),
    )
    op.create_index("idx_oauth_identities_user_id", "oauth_identities", ["user_id"])

    op.execute(
        """
        CREATE FUNCTION touch_updated_at() RETURNS trigger AS $$
        BEGIN
            NEW.updated_at := now();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
        """
    )
    for table in TOUCHED_TABLES:
        op.execute(
            f"CREATE TRIGGER {table}_touch_updated_at BEFORE UPDATE ON {table} "
            "FOR EACH ROW EXECUTE FUNCTION touch_updated_at()"
        )


def downgrade() -> None:
    for table in TOUCHED_TABLES:
        op.execute(f"DROP TRIGGER IF EXISTS {table}_touch_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS touch_updated_at()")

    op.drop_table("oauth_identities")
    op.drop_table("users")
