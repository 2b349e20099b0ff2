"""SQLAlchemy ORM models for travel plans and points."""

import uuid
from datetime import date, datetime
from typing import Any

from sqlalchemy import JSON, Date, DateTime, Float, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JsonType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TravelPlanRow(Base):
    """Travel plan table - one row per generation request."""

    __tablename__ = "travel_plan"
    __table_args__ = (Index("idx_travel_plan_user", "user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    transportation_type: Mapped[str] = mapped_column(Text, nullable=False)
    total_distance_km: Mapped[float] = mapped_column(Float, nullable=False)
    route_type: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Relationships
    points: Mapped[list["TravelPointRow"]] = relationship(
        "TravelPointRow",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="TravelPointRow.position",
    )


class TravelPointRow(Base):
    """Travel point table - day markers and their attached amenities."""

    __tablename__ = "travel_point"
    __table_args__ = (Index("idx_travel_point_plan", "travel_plan_id", "day_number"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    travel_plan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("travel_plan.id", ondelete="CASCADE"), nullable=False
    )
    parent_point_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("travel_point.id"), nullable=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    location: Mapped[dict[str, Any]] = mapped_column(JsonType, nullable=False)
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    start_location: Mapped[dict[str, Any] | None] = mapped_column(JsonType, nullable=True)
    end_location: Mapped[dict[str, Any] | None] = mapped_column(JsonType, nullable=True)
    distance_km: Mapped[float | None] = mapped_column(Float, nullable=True)
    duration_minutes: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Relationships
    plan: Mapped["TravelPlanRow"] = relationship("TravelPlanRow", back_populates="points")
