"""add one-to-one flight weather snapshot table"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0003_add_flight_weather_snapshot"
down_revision = "0002_create_flight"
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "flight_weather_snapshot",
        sa.Column("flight_id", sa.String(length=64), sa.ForeignKey("flight.id"), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("captured_at", sa.DateTime(), nullable=False),
        sa.Column("unavailable", sa.Boolean(), nullable=False),
        sa.Column("origin_json", sa.Text(), nullable=True),
        sa.Column("destination_json", sa.Text(), nullable=True),
        sa.Column("notes", sa.String(length=512), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("flight_id"),
    )
    op.create_index(
        op.f("ix_flight_weather_snapshot_unavailable"),
        "flight_weather_snapshot",
        ["unavailable"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(
        op.f("ix_flight_weather_snapshot_unavailable"), table_name="flight_weather_snapshot"
    )
    op.drop_table("flight_weather_snapshot")
