"""Travel plan and travel point tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

- travel_plan: one row per generated plan, owned by user_id
- travel_point: day markers and amenity points, children link to their
  day marker through parent_point_id
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JsonType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    """Create travel_plan and travel_point."""
    op.create_table(
        "travel_plan",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("transportation_type", sa.Text(), nullable=False),
        sa.Column("total_distance_km", sa.Float(), nullable=False),
        sa.Column("route_type", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_travel_plan_user", "travel_plan", ["user_id", "created_at"])

    op.create_table(
        "travel_point",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("travel_plan_id", sa.Uuid(), nullable=False),
        sa.Column("parent_point_id", sa.Uuid(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", JsonType, nullable=False),
        sa.Column("day_number", sa.Integer(), nullable=False),
        sa.Column("start_location", JsonType, nullable=True),
        sa.Column("end_location", JsonType, nullable=True),
        sa.Column("distance_km", sa.Float(), nullable=True),
        sa.Column("duration_minutes", sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(["travel_plan_id"], ["travel_plan.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_point_id"], ["travel_point.id"]),
    )
    op.create_index("idx_travel_point_plan", "travel_point", ["travel_plan_id", "day_number"])


def downgrade() -> None:
    """Drop travel_point and travel_plan."""
    op.drop_index("idx_travel_point_plan", table_name="travel_point")
    op.drop_table("travel_point")
    op.drop_index("idx_travel_plan_user", table_name="travel_plan")
    op.drop_table("travel_plan")
