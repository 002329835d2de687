"""Create players table.

Revision ID: 20261018_000001
Revises:
Create Date: 2026-10-18 00:00:01
"""

from alembic import op  # type: ignore[attr-defined]
import sqlalchemy as sa

revision = "20261018_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "players",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("position", sa.String(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("team", sa.String(), nullable=True),
        sa.Column("games", sa.Integer(), nullable=True),
        sa.Column("points", sa.Float(), nullable=True),
        sa.Column("rebounds", sa.Float(), nullable=True),
        sa.Column("assists", sa.Float(), nullable=True),
        sa.Column("source_slug", sa.String(), nullable=True),
    )
    op.create_index("ix_players_name", "players", ["name"], unique=False)
    op.create_index("ix_players_source_slug", "players", ["source_slug"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_players_source_slug", table_name="players")
    op.drop_index("ix_players_name", table_name="players")
    op.drop_table("players")
