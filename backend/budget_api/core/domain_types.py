"""Domain Types — rich types and constants that replace bare primitives.

Invariants:
    - CurrencyCode is a 3-character code (ISO 4217 shape, not checked against a registry)
    - BASE_CURRENCY is the currency stored final budgets are expressed in (finalBudgetUsd)
    - Projects dated before MIN_PROJECT_YEAR are rejected at validation

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType


CurrencyCode = NewType("CurrencyCode", str)

CURRENCY_CODE_LENGTH: int = 3
BASE_CURRENCY = CurrencyCode("USD")
MIN_PROJECT_YEAR: int = 2000

# Signed 64-bit range of the store's INTEGER/BIGINT columns
STORE_INTEGER_MIN: int = -(2**63)
STORE_INTEGER_MAX: int = 2**63 - 1

# Currency the legacy /api-conversion route always converts into
LEGACY_CONVERSION_CURRENCY = CurrencyCode("TTD")
