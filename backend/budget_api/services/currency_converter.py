"""Currency Converter — applies a looked-up rate to a monetary amount.

Invariants:
    - from == to short-circuits: amount returned unchanged, no rate lookup
    - Result keeps full float precision; rounding happens at serialization
    - Every rate lookup failure is re-raised as ConversionError (original chained)
"""

import logging

from budget_api.core.errors import ConversionError, RateLookupError
from budget_api.core.repository_protocols import RateLookup

logger = logging.getLogger(__name__)


async def convert_currency(
    amount: float, from_currency: str, to_currency: str, rate_lookup: RateLookup,
) -> float:
    """Convert `amount` from one currency to another using a live rate."""
    if from_currency == to_currency:
        return amount
    try:
        rate = await rate_lookup.get_exchange_rate(from_currency, to_currency)
    except RateLookupError as e:
        logger.warning(
            f"Conversion {from_currency}->{to_currency} failed: {e.message}",
            extra={"currency": to_currency, "error_code": e.code},
        )
        raise ConversionError(e.message) from e
    return amount * rate
