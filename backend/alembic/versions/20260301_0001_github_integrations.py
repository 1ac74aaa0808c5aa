"""github integrations

Revision ID: 20260301_0001
Revises:
Create Date: 2026-03-01
"""

from alembic import op
import sqlalchemy as sa


revision = "20260301_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "github_integrations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("access_token", sa.String(length=512), nullable=False),
        sa.Column("refresh_token", sa.String(length=512)),
        sa.Column("github_id", sa.String(length=255)),
        sa.Column("github_username", sa.String(length=255)),
        sa.Column("display_name", sa.String(length=255)),
        sa.Column("email", sa.String(length=255)),
        sa.Column("avatar_url", sa.String(length=512)),
        sa.Column("data", sa.JSON()),
        sa.Column("connected_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("last_sync_at", sa.DateTime()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_github_integrations_id", "github_integrations", ["id"])
    op.create_index(
        "ix_github_integrations_user_id", "github_integrations", ["user_id"], unique=True
    )


def downgrade() -> None:
    op.drop_index("ix_github_integrations_user_id", table_name="github_integrations")
    op.drop_index("ix_github_integrations_id", table_name="github_integrations")
    op.drop_table("github_integrations")
