"""Project ORM — table definition for capital-project budget records.

Invariants:
    - projectId is the caller-supplied primary key (no autoincrement)
    - Column names are the camelCase wire names, so raw SQL rows map 1:1 onto ProjectRecord
    - createdAt/updatedAt are assigned by the database (CURRENT_TIMESTAMP)

Design Decisions:
    - ORM class exists for metadata (create_all, alembic), not for querying —
      the repository issues parameterized SQL through the QueryExecutor
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from budget_api.db.base import Base


class Project(Base):
    """Capital project with its budget figures."""
    __tablename__ = "project"
    __table_args__ = (Index("ix_project_name_year", "projectName", "year"),)

    project_id: Mapped[int] = mapped_column(
        "projectId", Integer, primary_key=True, autoincrement=False,
    )
    project_name: Mapped[str] = mapped_column("projectName", Text, nullable=False)
    year: Mapped[int] = mapped_column("year", Integer, nullable=False)
    currency: Mapped[str] = mapped_column("currency", String(3), nullable=False)
    initial_budget_local: Mapped[float] = mapped_column(
        "initialBudgetLocal", Float, nullable=False,
    )
    budget_usd: Mapped[float] = mapped_column("budgetUsd", Float, nullable=False)
    initial_schedule_estimate_months: Mapped[int] = mapped_column(
        "initialScheduleEstimateMonths", Integer, nullable=False,
    )
    adjusted_schedule_estimate_months: Mapped[int] = mapped_column(
        "adjustedScheduleEstimateMonths", Integer, nullable=False,
    )
    contingency_rate: Mapped[float] = mapped_column(
        "contingencyRate", Float, nullable=False,
    )
    escalation_rate: Mapped[float] = mapped_column(
        "escalationRate", Float, nullable=False,
    )
    final_budget_usd: Mapped[float] = mapped_column(
        "finalBudgetUsd", Float, nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime, nullable=False, server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt", DateTime, nullable=False, server_default=func.now(),
    )
