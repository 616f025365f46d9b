"""Root conftest — shared test configuration."""

import os

# Ensure tests never hit the real rate provider or a file database
os.environ.setdefault("EXCHANGE_RATE_API_KEY", "test-fake-key")
os.environ.setdefault("EXCHANGE_RATE_BASE_URL", "https://rates.invalid/v6")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE_CREATE_SCHEMA", "false")
