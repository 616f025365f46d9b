"""Project Budget Orchestration — validate → fetch/mutate → shape, one function per route.

Invariants:
    - Functions raise typed BudgetApiError subclasses; they never build HTTP responses
    - Validation runs before any IO; an invalid payload never reaches the repository
    - Conversions run sequentially in repository order (one rate lookup per project,
      never fanned out), so the response order is deterministic
    - Requesting the base currency (USD) returns projects unmodified, with no lookup
    - Update and delete of an unknown id raise NotFoundError; nothing is upserted

Design Decisions:
    - Repository and rate lookup passed in explicitly: routes resolve them from
      app.state via dependencies, tests pass fakes
"""

import logging
from typing import Any, Mapping

from budget_api.core.domain_types import BASE_CURRENCY, LEGACY_CONVERSION_CURRENCY
from budget_api.core.errors import ErrorContext, NotFoundError, ValidationError
from budget_api.core.repository_protocols import RateLookup
from budget_api.core.validation import (
    validate_currency_request, validate_project_data, validate_project_update,
)
from budget_api.schemas.project import ConvertedProject, ProjectRecord
from budget_api.services.currency_converter import convert_currency
from budget_api.services.project_repository import ProjectRepository

logger = logging.getLogger(__name__)

PROJECT_CREATED_MESSAGE = "Project created successfully"
PROJECT_UPDATED_MESSAGE = "Project updated successfully"
PROJECT_DELETED_MESSAGE = "Project deleted successfully"


async def convert_projects_to_currency(
    projects: list[ProjectRecord], currency: str, rate_lookup: RateLookup,
) -> list[ConvertedProject]:
    converted = []
    for project in projects:
        view = ConvertedProject(project=project)
        if currency != BASE_CURRENCY:
            view.converted_budgets[currency] = await convert_currency(
                project.final_budget_usd, BASE_CURRENCY, currency, rate_lookup,
            )
        converted.append(view)
    return converted


async def convert_project_budgets(
    payload: Mapping[str, Any],
    repository: ProjectRepository,
    rate_lookup: RateLookup,
) -> list[ConvertedProject]:
    """Find every project matching (projectName, year) and convert its final budget."""
    validation = validate_currency_request(payload)
    if not validation.valid:
        raise ValidationError(validation.error)

    project_name = payload["projectName"]
    year = int(payload["year"])
    currency = payload["currency"]

    projects = await repository.find_projects_by_name_and_year(project_name, year)
    if not projects:
        raise NotFoundError(context=ErrorContext(currency=currency))

    logger.info(
        f"Converting {len(projects)} project(s) '{project_name}' ({year})",
        extra={"currency": currency},
    )
    return await convert_projects_to_currency(projects, currency, rate_lookup)


async def get_project(project_id: int, repository: ProjectRepository) -> ProjectRecord:
    project = await repository.find_project_by_id(project_id)
    if project is None:
        raise NotFoundError(context=ErrorContext(project_id=project_id))
    return project


async def create_project(
    payload: Mapping[str, Any], repository: ProjectRepository,
) -> ProjectRecord:
    """Validate a creation payload and persist it as a new project."""
    validation = validate_project_data(payload)
    if not validation.valid:
        raise ValidationError(validation.error)

    project = ProjectRecord.model_validate(
        {name: value for name, value in payload.items()
         if name not in ("createdAt", "updatedAt")},
    )
    await repository.insert_project(project)
    return project


async def convert_project_budgets_to_legacy_currency(
    payload: Mapping[str, Any],
    repository: ProjectRepository,
    rate_lookup: RateLookup,
) -> list[ConvertedProject]:
    """Same lookup as convert_project_budgets with the currency fixed to TTD."""
    return await convert_project_budgets(
        {**payload, "currency": LEGACY_CONVERSION_CURRENCY}, repository, rate_lookup,
    )


async def update_project(
    project_id: int, payload: Mapping[str, Any], repository: ProjectRepository,
) -> ProjectRecord:
    """Replace every mutable field of an existing project; the path id wins."""
    validation = validate_project_update(payload)
    if not validation.valid:
        raise ValidationError(validation.error)

    project = ProjectRecord.model_validate(
        {**{name: value for name, value in payload.items()
            if name not in ("createdAt", "updatedAt")},
         "projectId": project_id},
    )
    if not await repository.update_project(project_id, project):
        raise NotFoundError(context=ErrorContext(project_id=project_id))
    return project


async def delete_project(project_id: int, repository: ProjectRepository) -> None:
    if not await repository.delete_project(project_id):
        raise NotFoundError(context=ErrorContext(project_id=project_id))
