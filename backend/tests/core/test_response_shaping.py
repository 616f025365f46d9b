"""Response Shaping — envelope, converted field naming, rounding, project views.

Tests cover:
    - success envelopes carry data and no error; failures the reverse
    - converted budget keys are finalBudget + lowercased currency
    - rounding to 2 decimals happens at serialization only
    - ConvertedProject without conversions serializes exactly like its project
"""

from budget_api.core.budget_fields import converted_budget_field, round_amount
from budget_api.core.envelope import format_response
from budget_api.schemas.project import ConvertedProject, ProjectRecord


def _record():
    return ProjectRecord(
        project_id=1, project_name="Bridge", year=2021, currency="USD",
        initial_budget_local=1000, budget_usd=1000,
        initial_schedule_estimate_months=12, adjusted_schedule_estimate_months=14,
        contingency_rate=2.5, escalation_rate=3.0, final_budget_usd=1000,
    )


def test_success_envelope_has_data_only():
    assert format_response(True, [1]) == {"success": True, "data": [1]}


def test_failure_envelope_has_error_only():
    assert format_response(False, error="boom") == {"success": False, "error": "boom"}


def test_converted_budget_field_lowercases_currency():
    assert converted_budget_field("EUR") == "finalBudgeteur"
    assert converted_budget_field("jpy") == "finalBudgetjpy"


def test_round_amount_two_decimals():
    assert round_amount(900.0000000000001) == 900.0
    assert round_amount(1234.5678) == 1234.57


def test_project_record_serializes_camel_case():
    body = _record().to_response()
    assert body["projectId"] == 1
    assert body["finalBudgetUsd"] == 1000.0
    assert body["initialScheduleEstimateMonths"] == 12
    assert body["createdAt"] is None


def test_project_record_validates_from_camel_case_row():
    row = _record().to_response()
    row["createdAt"] = "2024-01-02 03:04:05"
    record = ProjectRecord.model_validate(row)
    assert record.project_name == "Bridge"
    assert record.created_at.year == 2024


def test_unconverted_view_matches_project():
    record = _record()
    assert ConvertedProject(project=record).to_response() == record.to_response()


def test_converted_view_adds_rounded_field():
    view = ConvertedProject(project=_record(), converted_budgets={"EUR": 900.0000001})
    body = view.to_response()
    assert body["finalBudgeteur"] == 900.0
    assert body["finalBudgetUsd"] == 1000.0
