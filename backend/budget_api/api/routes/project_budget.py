"""Project Budget Routes — create, fetch, update, delete and currency-convert capital projects.

Invariants:
    - Payloads arrive as raw JSON objects; shape/type checks live in core/validation.py
    - Errors propagate to api/error_handlers.py — routes never build error responses
    - GET /{project_id} returns the bare project object (no envelope) — kept for
      compatibility with existing clients
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from budget_api.api.dependencies import get_project_repository, get_rate_lookup
from budget_api.core.envelope import format_response
from budget_api.core.repository_protocols import RateLookup
from budget_api.services.project_budget import (
    PROJECT_CREATED_MESSAGE,
    PROJECT_DELETED_MESSAGE,
    PROJECT_UPDATED_MESSAGE,
    convert_project_budgets,
    create_project,
    delete_project,
    get_project,
    update_project,
)
from budget_api.services.project_repository import ProjectRepository

router = APIRouter(prefix="/project/budget", tags=["project-budget"])


@router.post("/currency")
async def convert_budget_currency(
    payload: dict[str, Any] = Body(...),
    repository: ProjectRepository = Depends(get_project_repository),
    rate_lookup: RateLookup = Depends(get_rate_lookup),
):
    """Return every project matching (projectName, year) with its budget converted."""
    converted = await convert_project_budgets(payload, repository, rate_lookup)
    return format_response(True, [view.to_response() for view in converted])


@router.get("/{project_id}")
async def get_project_budget(
    project_id: int,
    repository: ProjectRepository = Depends(get_project_repository),
):
    project = await get_project(project_id, repository)
    return project.to_response()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project_budget(
    payload: dict[str, Any] = Body(...),
    repository: ProjectRepository = Depends(get_project_repository),
):
    """Create a project from a full budget payload."""
    await create_project(payload, repository)
    return format_response(True, {"message": PROJECT_CREATED_MESSAGE})


@router.put("/{project_id}")
async def update_project_budget(
    project_id: int,
    payload: dict[str, Any] = Body(...),
    repository: ProjectRepository = Depends(get_project_repository),
):
    """Replace the budget fields of an existing project (projectId comes from the path)."""
    await update_project(project_id, payload, repository)
    return format_response(True, {"message": PROJECT_UPDATED_MESSAGE})


@router.delete("/{project_id}")
async def delete_project_budget(
    project_id: int,
    repository: ProjectRepository = Depends(get_project_repository),
):
    await delete_project(project_id, repository)
    return format_response(True, {"message": PROJECT_DELETED_MESSAGE})
