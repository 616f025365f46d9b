"""Project Schemas — typed project record and its converted-currency view.

Invariants:
    - ProjectRecord attributes are snake_case; aliases are the camelCase wire/column names
    - Store rows are mapped to ProjectRecord at the repository boundary — routes and
      services never handle raw row dicts
    - ConvertedProject never mutates its ProjectRecord

Design Decisions:
    - alias_generator=to_camel + populate_by_name: same model validates DB rows,
      request payloads, and Python keyword construction
    - converted_budgets as dict[currency → amount]: the `finalBudget<ccy>` key is
      derived only in to_response()
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from budget_api.core.budget_fields import converted_budget_field, round_amount


class ProjectRecord(BaseModel):
    """A persisted capital project."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )

    project_id: int
    project_name: str
    year: int
    currency: str
    initial_budget_local: float
    budget_usd: float
    initial_schedule_estimate_months: int
    adjusted_schedule_estimate_months: int
    contingency_rate: float
    escalation_rate: float
    final_budget_usd: float
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_response(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ConvertedProject(BaseModel):
    """A project plus final budgets converted into other currencies."""

    project: ProjectRecord
    converted_budgets: dict[str, float] = Field(default_factory=dict)

    def to_response(self) -> dict:
        body = self.project.to_response()
        for currency, amount in self.converted_budgets.items():
            body[converted_budget_field(currency)] = round_amount(amount)
        return body
