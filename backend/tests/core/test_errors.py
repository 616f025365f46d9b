"""Error Hierarchy — categories and messages of typed errors.

Tests cover:
    - every currency failure shares the CURRENCY category
    - ConversionError prefixes the original reason
    - DuplicateKeyError names the colliding projectId
    - ConstraintViolationError is a PersistenceError
"""

from budget_api.core.errors import (
    ConstraintViolationError,
    ConversionError,
    CurrencyError,
    CurrencyNotSupportedError,
    DuplicateKeyError,
    ErrorCategory,
    NotFoundError,
    PersistenceError,
    ProviderError,
    RateNotFoundError,
)


def test_currency_errors_share_category():
    for error in (
        CurrencyError("x"),
        ConversionError("x"),
        RateNotFoundError("EUR"),
        CurrencyNotSupportedError("XYZ"),
    ):
        assert error.category == ErrorCategory.CURRENCY


def test_conversion_error_message_wraps_reason():
    assert ConversionError("Rate not found for EUR").message == (
        "Currency conversion failed: Rate not found for EUR"
    )


def test_rate_errors_carry_currency():
    assert RateNotFoundError("EUR").context.currency == "EUR"
    assert CurrencyNotSupportedError("XYZ").message == "Currency not supported: XYZ"


def test_duplicate_key_error_names_project():
    error = DuplicateKeyError(42)
    assert error.category == ErrorCategory.CONFLICT
    assert error.context.project_id == 42
    assert "42" in error.message


def test_not_found_default_message():
    assert NotFoundError().message == "Project not found"


def test_provider_error_is_not_a_currency_error():
    assert not isinstance(ProviderError("down"), CurrencyError)
    assert ProviderError("down").category == ErrorCategory.EXTERNAL_API


def test_constraint_violation_is_persistence_error():
    error = ConstraintViolationError("dup")
    assert isinstance(error, PersistenceError)
    assert error.category == ErrorCategory.DATABASE
