"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - QueryExecutor hides the storage engine: repositories only see SQL text,
      positional parameters, and rows-or-rowcount
"""

from typing import Any, Protocol, Sequence


Row = dict[str, Any]


class QueryExecutor(Protocol):
    """Contract for running one parameterized statement against the store.

    Row-returning statements yield a list of rows (column name → value);
    everything else yields the affected-row count. Every storage failure
    surfaces as PersistenceError.
    """
    async def execute(
        self, query: str, params: Sequence[Any] = (),
    ) -> list[Row] | int: ...


class RateLookup(Protocol):
    """Contract for exchange-rate lookup — implemented by shell."""
    async def get_exchange_rate(self, from_currency: str, to_currency: str) -> float: ...
