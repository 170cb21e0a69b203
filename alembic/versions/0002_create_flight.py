"""create flight table"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0002_create_flight"
down_revision = "0001_create_airport"
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "flight",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("origin", sa.String(), nullable=True),
        sa.Column("destination", sa.String(), nullable=True),
        sa.Column("origin_airport_id", sa.Integer(), sa.ForeignKey("airport.id"), nullable=True),
        sa.Column(
            "destination_airport_id", sa.Integer(), sa.ForeignKey("airport.id"), nullable=True
        ),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=True),
        sa.Column("planned_start_time", sa.DateTime(), nullable=True),
        sa.Column("planned_end_time", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_flight_start_time"), "flight", ["start_time"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_flight_start_time"), table_name="flight")
    op.drop_table("flight")
