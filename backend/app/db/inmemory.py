"""In-memory implementation of the plan repository."""

import uuid

from backend.app.db.context import RequestContext
from backend.app.models.common import PointType
from backend.app.models.plan import PlanTree, TravelPlan, TravelPoint


class InMemoryPlanRepository:
    """In-memory implementation of PlanRepository."""

    def __init__(self) -> None:
        self._plans: dict[uuid.UUID, TravelPlan] = {}
        self._points: dict[uuid.UUID, list[TravelPoint]] = {}

    async def save_plan(self, tree: PlanTree) -> PlanTree:
        """Persist a plan and all of its points."""
        plan_id = tree.plan.id
        if plan_id in self._plans:
            raise ValueError(f"Plan {plan_id} already exists")

        known_ids = {p.id for p in tree.points}
        for point in tree.points:
            if point.travel_plan_id != plan_id:
                raise ValueError(f"Point {point.id} does not belong to plan {plan_id}")
            if point.parent_point_id is not None and point.parent_point_id not in known_ids:
                raise ValueError(f"Point {point.id} references unknown parent")

        # Both dicts are only touched after validation, so a failure stores nothing
        self._plans[plan_id] = tree.plan
        self._points[plan_id] = list(tree.points)
        return tree

    async def get_plan(self, plan_id: uuid.UUID, ctx: RequestContext) -> TravelPlan | None:
        """Get plan by ID."""
        plan = self._plans.get(plan_id)

        # Enforce ownership
        if plan is None or plan.user_id != ctx.user_id:
            return None

        return plan

    async def list_points(
        self,
        plan_id: uuid.UUID,
        ctx: RequestContext,
        point_type: PointType | None = None,
    ) -> list[TravelPoint]:
        """List a plan's points ordered by day."""
        if await self.get_plan(plan_id, ctx) is None:
            return []

        points = [
            p for p in self._points.get(plan_id, []) if point_type is None or p.type == point_type
        ]
        # Stable sort keeps insertion order within a day
        return sorted(points, key=lambda p: p.day_number)
