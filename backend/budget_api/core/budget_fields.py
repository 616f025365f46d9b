"""Budget Field Rules — naming and rounding of derived budget figures.

Invariants:
    - Converted budgets are keyed by currency code internally and only become
      `finalBudget<code>` keys when serialized
    - Rounding to 2 decimals happens once, at serialization
"""

CONVERTED_BUDGET_PREFIX = "finalBudget"
AMOUNT_DECIMALS = 2


def converted_budget_field(currency: str) -> str:
    """Response key for a final budget converted to `currency` (EUR → finalBudgeteur)."""
    return f"{CONVERTED_BUDGET_PREFIX}{currency.lower()}"


def round_amount(amount: float) -> float:
    return round(amount, AMOUNT_DECIMALS)
