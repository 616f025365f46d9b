"""Project Repository — CRUD over the `project` table through the QueryExecutor.

Invariants:
    - All SQL is parameterized (`?` placeholders) — no value is interpolated into query text
    - Rows are mapped to ProjectRecord here; nothing above this layer sees row dicts
    - Name+year lookup returns every match in storage order (no ORDER BY)
    - Absent id → None / False (not an error); duplicate projectId → DuplicateKeyError
    - Ids outside the store's signed 64-bit range are never sent to the database:
      they cannot name a stored row, so they read as absent
    - createdAt is never written by the repository (database default); updatedAt is
      only touched by UPDATE, set to CURRENT_TIMESTAMP by the database

Design Decisions:
    - Any constraint violation on insert is reported as DuplicateKeyError: validation
      guarantees every NOT NULL column is present, so the primary key is the only
      constraint an accepted payload can violate
"""

import logging

from budget_api.core.domain_types import STORE_INTEGER_MAX, STORE_INTEGER_MIN
from budget_api.core.errors import (
    ConstraintViolationError, DuplicateKeyError, ErrorContext, PersistenceError,
)
from budget_api.core.repository_protocols import QueryExecutor, Row
from budget_api.schemas.project import ProjectRecord

logger = logging.getLogger(__name__)

PROJECT_COLUMNS: tuple[str, ...] = (
    "projectId",
    "projectName",
    "year",
    "currency",
    "initialBudgetLocal",
    "budgetUsd",
    "initialScheduleEstimateMonths",
    "adjustedScheduleEstimateMonths",
    "contingencyRate",
    "escalationRate",
    "finalBudgetUsd",
)

_SELECT_COLUMNS = ", ".join(
    f'"{name}"' for name in (*PROJECT_COLUMNS, "createdAt", "updatedAt")
)
SELECT_BY_NAME_AND_YEAR = (
    f'SELECT {_SELECT_COLUMNS} FROM project WHERE "projectName" = ? AND "year" = ?'
)
SELECT_BY_ID = f'SELECT {_SELECT_COLUMNS} FROM project WHERE "projectId" = ?'
INSERT_PROJECT = (
    "INSERT INTO project ({columns}) VALUES ({placeholders})".format(
        columns=", ".join(f'"{name}"' for name in PROJECT_COLUMNS),
        placeholders=", ".join("?" for _ in PROJECT_COLUMNS),
    )
)
_UPDATABLE_COLUMNS = PROJECT_COLUMNS[1:]
UPDATE_PROJECT = (
    "UPDATE project SET {assignments}, \"updatedAt\" = CURRENT_TIMESTAMP "
    "WHERE \"projectId\" = ?"
).format(
    assignments=", ".join(f'"{name}" = ?' for name in _UPDATABLE_COLUMNS),
)
DELETE_PROJECT = 'DELETE FROM project WHERE "projectId" = ?'


def _storable_id(project_id: int) -> bool:
    return STORE_INTEGER_MIN <= project_id <= STORE_INTEGER_MAX


def _to_records(rows: list[Row] | int) -> list[ProjectRecord]:
    if isinstance(rows, int):
        raise PersistenceError("Expected rows, got an affected-row count", "query")
    return [ProjectRecord.model_validate(row) for row in rows]


class ProjectRepository:
    """Project persistence — implemented over any QueryExecutor."""

    def __init__(self, executor: QueryExecutor):
        self._executor = executor

    async def find_projects_by_name_and_year(
        self, project_name: str, year: int,
    ) -> list[ProjectRecord]:
        rows = await self._executor.execute(SELECT_BY_NAME_AND_YEAR, [project_name, year])
        return _to_records(rows)

    async def find_project_by_id(self, project_id: int) -> ProjectRecord | None:
        if not _storable_id(project_id):
            return None
        records = _to_records(
            await self._executor.execute(SELECT_BY_ID, [project_id]),
        )
        return records[0] if records else None

    async def insert_project(self, project: ProjectRecord) -> None:
        row = project.model_dump(by_alias=True)
        params = [row[name] for name in PROJECT_COLUMNS]
        try:
            affected = await self._executor.execute(INSERT_PROJECT, params)
        except ConstraintViolationError as e:
            raise DuplicateKeyError(project.project_id) from e
        if not affected:
            raise PersistenceError(
                "No rows inserted", "insert",
                ErrorContext(project_id=project.project_id),
            )
        logger.info(
            "Project created", extra={"project_id": project.project_id},
        )

    async def update_project(self, project_id: int, project: ProjectRecord) -> bool:
        """Overwrite every mutable column of `project_id`. False when no row matched."""
        if not _storable_id(project_id):
            return False
        row = project.model_dump(by_alias=True)
        params = [row[name] for name in _UPDATABLE_COLUMNS] + [project_id]
        affected = await self._executor.execute(UPDATE_PROJECT, params)
        if isinstance(affected, list):
            raise PersistenceError("Expected an affected-row count, got rows", "update")
        if affected:
            logger.info("Project updated", extra={"project_id": project_id})
        return bool(affected)

    async def delete_project(self, project_id: int) -> bool:
        if not _storable_id(project_id):
            return False
        affected = await self._executor.execute(DELETE_PROJECT, [project_id])
        if isinstance(affected, list):
            raise PersistenceError("Expected an affected-row count, got rows", "delete")
        if affected:
            logger.info("Project deleted", extra={"project_id": project_id})
        return bool(affected)
