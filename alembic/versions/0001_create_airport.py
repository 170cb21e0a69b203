"""create airport directory table"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_create_airport"
down_revision = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "airport",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("icao", sa.String(length=8), nullable=False),
        sa.Column("iata", sa.String(length=4), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("region", sa.String(length=16), nullable=True),
        sa.Column("country", sa.String(length=8), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("time_zone", sa.String(length=64), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_airport_icao"), "airport", ["icao"], unique=True)
    op.create_index(op.f("ix_airport_iata"), "airport", ["iata"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_airport_iata"), table_name="airport")
    op.drop_index(op.f("ix_airport_icao"), table_name="airport")
    op.drop_table("airport")
