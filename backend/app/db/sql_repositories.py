"""SQL implementation of the plan repository."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.context import RequestContext
from backend.app.db.models import TravelPlanRow, TravelPointRow
from backend.app.models.common import Location, PointType, RouteType, TransportMode
from backend.app.models.plan import PlanTree, TravelPlan, TravelPoint


def _location_json(location: Location | None) -> dict | None:
    return location.model_dump(mode="json") if location is not None else None


def _plan_from_row(row: TravelPlanRow) -> TravelPlan:
    return TravelPlan(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        description=row.description,
        start_date=row.start_date,
        end_date=row.end_date,
        transportation_type=TransportMode.coerce(row.transportation_type),
        total_distance_km=row.total_distance_km,
        route_type=RouteType(row.route_type),
        created_at=row.created_at,
    )


def _point_from_row(row: TravelPointRow) -> TravelPoint:
    return TravelPoint(
        id=row.id,
        travel_plan_id=row.travel_plan_id,
        parent_point_id=row.parent_point_id,
        type=PointType(row.type),
        name=row.name,
        description=row.description,
        location=Location.model_validate(row.location),
        day_number=row.day_number,
        start_location=Location.model_validate(row.start_location) if row.start_location else None,
        end_location=Location.model_validate(row.end_location) if row.end_location else None,
        distance_km=row.distance_km,
        duration_minutes=row.duration_minutes,
    )


class SqlPlanRepository:
    """SQL implementation of PlanRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save_plan(self, tree: PlanTree) -> PlanTree:
        """Persist a plan and all of its points in one transaction."""
        plan = tree.plan
        plan_row = TravelPlanRow(
            id=plan.id,
            user_id=plan.user_id,
            name=plan.name,
            description=plan.description,
            start_date=plan.start_date,
            end_date=plan.end_date,
            transportation_type=plan.transportation_type.value,
            total_distance_km=plan.total_distance_km,
            route_type=plan.route_type.value,
            created_at=plan.created_at,
        )
        point_rows = [
            TravelPointRow(
                id=point.id,
                travel_plan_id=point.travel_plan_id,
                parent_point_id=point.parent_point_id,
                position=position,
                type=point.type.value,
                name=point.name,
                description=point.description,
                location=_location_json(point.location),
                day_number=point.day_number,
                start_location=_location_json(point.start_location),
                end_location=_location_json(point.end_location),
                distance_km=point.distance_km,
                duration_minutes=point.duration_minutes,
            )
            for position, point in enumerate(tree.points)
        ]

        # Day markers precede their children in tree.points, so inserts respect
        # the parent_point_id foreign key.
        try:
            self._session.add(plan_row)
            self._session.add_all(point_rows)
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise

        return tree

    async def get_plan(self, plan_id: uuid.UUID, ctx: RequestContext) -> TravelPlan | None:
        """Get plan by ID."""
        result = await self._session.execute(
            select(TravelPlanRow).where(
                TravelPlanRow.id == plan_id,
                TravelPlanRow.user_id == ctx.user_id,
            )
        )
        row = result.scalar_one_or_none()

        if row is None:
            return None

        return _plan_from_row(row)

    async def list_points(
        self,
        plan_id: uuid.UUID,
        ctx: RequestContext,
        point_type: PointType | None = None,
    ) -> list[TravelPoint]:
        """List a plan's points ordered by day."""
        query = (
            select(TravelPointRow)
            .join(TravelPlanRow, TravelPointRow.travel_plan_id == TravelPlanRow.id)
            .where(
                TravelPointRow.travel_plan_id == plan_id,
                TravelPlanRow.user_id == ctx.user_id,
            )
            .order_by(TravelPointRow.day_number, TravelPointRow.position)
        )
        if point_type is not None:
            query = query.where(TravelPointRow.type == point_type.value)

        result = await self._session.execute(query)
        return [_point_from_row(row) for row in result.scalars().all()]
