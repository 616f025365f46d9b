"""Payload Validation — pure shape/type checks for incoming project and conversion payloads.

Invariants:
    - validate_* functions NEVER raise; callers inspect ValidationResult.valid
    - First failing check wins — error names exactly one problem
    - Required fields checked in PROJECT_REQUIRED_FIELDS order
    - bool is never accepted where a number is expected (JSON true is not 1)
    - Integers must fit the store's signed 64-bit columns; numbers must be finite,
      so no accepted payload can fail inside the database driver

Design Decisions:
    - Result object over exceptions: validation is an expected outcome, not a failure
      (shell converts an invalid result into ValidationError at the boundary)
    - Integral floats (2021.0) count as integers: JSON does not distinguish them
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping

from budget_api.core.domain_types import (
    CURRENCY_CODE_LENGTH, MIN_PROJECT_YEAR, STORE_INTEGER_MAX, STORE_INTEGER_MIN,
)


PROJECT_REQUIRED_FIELDS: tuple[str, ...] = (
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

PROJECT_INTEGER_FIELDS: tuple[str, ...] = (
    "projectId",
    "initialScheduleEstimateMonths",
    "adjustedScheduleEstimateMonths",
)

PROJECT_NUMBER_FIELDS: tuple[str, ...] = (
    "initialBudgetLocal",
    "budgetUsd",
    "contingencyRate",
    "escalationRate",
    "finalBudgetUsd",
)

PROJECT_UPDATE_FIELDS: tuple[str, ...] = tuple(
    name for name in PROJECT_REQUIRED_FIELDS if name != "projectId"
)

CURRENCY_REQUEST_FIELDS: tuple[str, ...] = ("year", "projectName", "currency")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None


VALID = ValidationResult(valid=True)


def _invalid(error: str) -> ValidationResult:
    return ValidationResult(valid=False, error=error)


def is_number(value: Any) -> bool:
    """Finite JSON number. bool, NaN, ±Infinity and ints too large for a float are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def is_integer(value: Any) -> bool:
    """Integral JSON number that fits the store's signed 64-bit integer columns."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not value.is_integer():
        return False
    return STORE_INTEGER_MIN <= value <= STORE_INTEGER_MAX


def is_currency_code(value: Any) -> bool:
    return isinstance(value, str) and len(value) == CURRENCY_CODE_LENGTH


def _validate_project_fields(
    payload: Mapping[str, Any], required: tuple[str, ...],
) -> ValidationResult:
    for name in required:
        if payload.get(name) is None:
            return _invalid(f"Missing required field: {name}")

    year = payload["year"]
    if not is_integer(year) or year < MIN_PROJECT_YEAR:
        return _invalid("Invalid year")

    if not is_currency_code(payload["currency"]):
        return _invalid("Invalid currency code")

    project_name = payload["projectName"]
    if not isinstance(project_name, str) or not project_name.strip():
        return _invalid("Invalid projectName")

    for name in PROJECT_INTEGER_FIELDS:
        if name in required and not is_integer(payload[name]):
            return _invalid(f"Invalid {name}: must be an integer")

    for name in PROJECT_NUMBER_FIELDS:
        if not is_number(payload[name]):
            return _invalid(f"Invalid {name}: must be a number")

    return VALID


def validate_project_data(payload: Mapping[str, Any]) -> ValidationResult:
    """Check a project creation payload. Pure — never raises."""
    return _validate_project_fields(payload, PROJECT_REQUIRED_FIELDS)


def validate_project_update(payload: Mapping[str, Any]) -> ValidationResult:
    """Check a project update payload — every field except projectId, which the path names."""
    return _validate_project_fields(payload, PROJECT_UPDATE_FIELDS)


def validate_currency_request(payload: Mapping[str, Any]) -> ValidationResult:
    """Check a currency conversion request. Pure — never raises."""
    if not all(payload.get(name) for name in CURRENCY_REQUEST_FIELDS):
        return _invalid("Missing required fields: year, projectName, currency")
    if not isinstance(payload["projectName"], str):
        return _invalid("projectName must be a string")
    if not is_integer(payload["year"]):
        return _invalid("Year must be a number")
    if not is_currency_code(payload["currency"]):
        return _invalid("Currency must be 3-letter code")
    return VALID
