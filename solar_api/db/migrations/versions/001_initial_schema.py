"""
Initial schema: create solar_readings and solar_events tables.

Revision ID: 001
Revises: None
Create Date: 2026-10-14

CHANGELOG:
- 2026-10-15: Add solar_events (STORY-004)
- 2026-10-14: Initial creation (STORY-008)

TODO:
- None
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# Revision identifiers used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the reading and event tables."""
    op.create_table(
        "solar_readings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("battery_voltage", sa.Double(), nullable=False),
        sa.Column("battery_current", sa.Double(), nullable=False),
        sa.Column("panel_voltage", sa.Double(), nullable=False),
        sa.Column("panel_power", sa.Integer(), nullable=False),
        sa.Column("load_current", sa.Double(), nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_solar_readings_recorded_at", "solar_readings", ["recorded_at"]
    )

    op.create_table(
        "solar_events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("event", sa.Text(), nullable=False),
    )


def downgrade() -> None:
    """Drop both tables."""
    op.drop_table("solar_events")
    op.drop_index("ix_solar_readings_recorded_at", table_name="solar_readings")
    op.drop_table("solar_readings")
