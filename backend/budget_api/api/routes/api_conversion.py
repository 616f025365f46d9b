"""Legacy Conversion Route — POST /api-conversion, fixed-currency (TTD) budget lookup.

Invariants:
    - Body is {projectName, year}; any client-sent currency is overridden with TTD
    - Same envelope, status codes and finalBudgetttd field shape as
      POST /project/budget/currency
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from budget_api.api.dependencies import get_project_repository, get_rate_lookup
from budget_api.core.envelope import format_response
from budget_api.core.repository_protocols import RateLookup
from budget_api.services.project_budget import convert_project_budgets_to_legacy_currency
from budget_api.services.project_repository import ProjectRepository

router = APIRouter(tags=["legacy"])


@router.post("/api-conversion")
async def convert_budget_to_ttd(
    payload: dict[str, Any] = Body(...),
    repository: ProjectRepository = Depends(get_project_repository),
    rate_lookup: RateLookup = Depends(get_rate_lookup),
):
    converted = await convert_project_budgets_to_legacy_currency(
        payload, repository, rate_lookup,
    )
    return format_response(True, [view.to_response() for view in converted])
