"""Table definitions mirroring the Alembic schema."""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()


def _timestamps() -> list[Column]:
    # updated_at is maintained by a trigger
    return [
        Column(
            name, TIMESTAMP(timezone=True), nullable=False, server_default=text("now()")
        )
        for name in ("created_at", "updated_at")
    ]


users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("nickname", String(255)),
    Column("email", String(255)),
    Column("avatar_url", Text),
    *_timestamps(),
)

# One row per (provider, provider_user_id); a user holds any number of them
oauth_identities_table = Table(
    "oauth_identities",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("provider", String(50), nullable=False),
    Column("provider_user_id", String(255), nullable=False),
    Column("access_token", Text, nullable=False),
    *_timestamps(),
    UniqueConstraint(
        "provider", "provider_user_id", name="uq_oauth_identities_provider_user"
    ),
)

Index("idx_users_email", users_table.c.email)
Index("idx_oauth_identities_user_id", oauth_identities_table.c.user_id)
