"""Initial schema — project budget table.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "project",
        sa.Column("projectId", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("projectName", sa.Text, nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("initialBudgetLocal", sa.Float, nullable=False),
        sa.Column("budgetUsd", sa.Float, nullable=False),
        sa.Column("initialScheduleEstimateMonths", sa.Integer, nullable=False),
        sa.Column("adjustedScheduleEstimateMonths", sa.Integer, nullable=False),
        sa.Column("contingencyRate", sa.Float, nullable=False),
        sa.Column("escalationRate", sa.Float, nullable=False),
        sa.Column("finalBudgetUsd", sa.Float, nullable=False),
        sa.Column("createdAt", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updatedAt", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_project_name_year", "project", ["projectName", "year"])


def downgrade() -> None:
    op.drop_index("ix_project_name_year", table_name="project")
    op.drop_table("project")
