"""Route Dependencies — resolve collaborators built at startup from app.state.

Invariants:
    - Collaborators are created once in the lifespan and read from app.state — never
      from module globals
    - Tests replace these via app.dependency_overrides
"""

from fastapi import Depends, Request

from budget_api.core.repository_protocols import QueryExecutor, RateLookup
from budget_api.infrastructure.database import DatabaseSessionManager
from budget_api.services.project_repository import ProjectRepository


def get_db_manager(request: Request) -> DatabaseSessionManager:
    return request.app.state.db_manager


def get_query_executor(request: Request) -> QueryExecutor:
    return request.app.state.query_executor


def get_rate_lookup(request: Request) -> RateLookup:
    return request.app.state.rate_client


def get_project_repository(
    executor: QueryExecutor = Depends(get_query_executor),
) -> ProjectRepository:
    return ProjectRepository(executor)
