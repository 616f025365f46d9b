"""Service test fixtures — in-memory SQLite, fake rate lookup, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the project table created
    - Route dependencies overridden to use the test executor, db manager and fake rates
    - The fake rate lookup records every call so tests can assert "no lookup happened"

Design Decisions:
    - SQLite in-memory via StaticPool: fast, no external dependency, shared by all sessions
    - ASGITransport does not run the lifespan, so app.state is never populated —
      dependency_overrides supply every collaborator instead
"""

import pytest
from httpx import ASGITransport, AsyncClient

from budget_api.api.dependencies import (
    get_db_manager, get_query_executor, get_rate_lookup,
)
from budget_api.config import Settings
from budget_api.core.errors import RateNotFoundError
from budget_api.infrastructure.database import DatabaseSessionManager, SqlQueryExecutor
from budget_api.main import create_app
from budget_api.schemas.project import ProjectRecord
from budget_api.services.project_repository import ProjectRepository

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeRateLookup:
    """In-memory rate table keyed by (from, to); raises `error` when set."""

    def __init__(self, rates: dict[tuple[str, str], float] | None = None):
        self.rates = rates or {}
        self.error: Exception | None = None
        self.calls: list[tuple[str, str]] = []

    async def get_exchange_rate(self, from_currency: str, to_currency: str) -> float:
        self.calls.append((from_currency, to_currency))
        if self.error is not None:
            raise self.error
        try:
            return self.rates[(from_currency, to_currency)]
        except KeyError:
            raise RateNotFoundError(to_currency)


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager(TEST_DATABASE_URL)
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
def executor(db_manager):
    return SqlQueryExecutor(db_manager)


@pytest.fixture
def repository(executor):
    return ProjectRepository(executor)


@pytest.fixture
def rate_lookup():
    return FakeRateLookup({("USD", "EUR"): 0.9, ("USD", "GBP"): 0.79, ("USD", "TTD"): 6.8})


@pytest.fixture
def project_payload():
    return {
        "projectId": 1,
        "projectName": "Bridge",
        "year": 2021,
        "currency": "USD",
        "initialBudgetLocal": 1000,
        "budgetUsd": 1000,
        "initialScheduleEstimateMonths": 12,
        "adjustedScheduleEstimateMonths": 14,
        "contingencyRate": 2.5,
        "escalationRate": 3.0,
        "finalBudgetUsd": 1000,
    }


@pytest.fixture
def make_project(project_payload):
    """Build a ProjectRecord from the base payload with camelCase overrides."""
    def _make(**overrides):
        return ProjectRecord.model_validate({**project_payload, **overrides})
    return _make


@pytest.fixture
def app(db_manager, executor, rate_lookup):
    application = create_app(
        Settings(database_url=TEST_DATABASE_URL, database_create_schema=False),
    )
    application.dependency_overrides[get_db_manager] = lambda: db_manager
    application.dependency_overrides[get_query_executor] = lambda: executor
    application.dependency_overrides[get_rate_lookup] = lambda: rate_lookup
    return application


@pytest.fixture
async def client(app):
    """FastAPI test client with every collaborator overridden."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
