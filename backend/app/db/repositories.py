"""Repository protocol interfaces for data access."""

from typing import Protocol
from uuid import UUID

from backend.app.db.context import RequestContext
from backend.app.models.common import PointType
from backend.app.models.plan import PlanTree, TravelPlan, TravelPoint


class PlanRepository(Protocol):
    """Repository for travel plans and their points."""

    async def save_plan(self, tree: PlanTree) -> PlanTree:
        """Persist a plan and all of its points atomically.

        Either the whole tree is stored or nothing is.

        Args:
            tree: Plan plus day markers and child points, ids already assigned

        Returns:
            The stored tree
        """
        ...

    async def get_plan(self, plan_id: UUID, ctx: RequestContext) -> TravelPlan | None:
        """Get plan by ID.

        Args:
            plan_id: Plan ID
            ctx: Request context (enforces ownership)

        Returns:
            Plan or None if not found
        """
        ...

    async def list_points(
        self,
        plan_id: UUID,
        ctx: RequestContext,
        point_type: PointType | None = None,
    ) -> list[TravelPoint]:
        """List a plan's points ordered by day.

        Args:
            plan_id: Plan ID
            ctx: Request context (enforces ownership)
            point_type: Optional filter on point type

        Returns:
            Points, empty if the plan is missing or not owned by the caller
        """
        ...
