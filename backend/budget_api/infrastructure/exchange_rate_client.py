"""Exchange Rate Client — single-pair rate lookup against an ExchangeRate-API style provider.

Invariants:
    - One outbound GET per get_exchange_rate call; rates are never cached
    - 404 for the base currency → CurrencyNotSupportedError
    - Successful table without the target currency → RateNotFoundError
    - Every other failure (transport, status, body shape) → ProviderError
    - The API key is part of the URL path and is never logged

Design Decisions:
    - Long-lived httpx.AsyncClient created at startup, closed on shutdown: connection
      pooling across requests; timeout is the only deadline a stalled lookup has
    - select_rate is pure (payload → rate) so body interpretation is testable without IO
    - transport injectable: tests use httpx.MockTransport instead of patching
"""

import logging
from typing import Any

import httpx

from budget_api.core.errors import (
    CurrencyNotSupportedError, ProviderError, RateNotFoundError,
)
from budget_api.core.validation import is_number

logger = logging.getLogger(__name__)

_SUCCESS = "success"
_UNSUPPORTED_CODE = "unsupported-code"


def select_rate(payload: Any, from_currency: str, to_currency: str) -> float:
    """Pick the `to_currency` multiplier out of a provider response body."""
    if not isinstance(payload, dict):
        raise ProviderError("Malformed exchange rate response")
    if payload.get("result") != _SUCCESS:
        if payload.get("error-type") == _UNSUPPORTED_CODE:
            raise CurrencyNotSupportedError(from_currency)
        raise ProviderError("Failed to fetch exchange rate")

    rates = payload.get("conversion_rates")
    if not isinstance(rates, dict):
        raise ProviderError("Exchange rate response missing conversion_rates")

    rate = rates.get(to_currency)
    if rate is None:
        raise RateNotFoundError(to_currency)
    if not is_number(rate):
        raise ProviderError(f"Non-numeric rate for {to_currency}")
    return float(rate)


class ExchangeRateClient:
    """Fetches the latest rate table for a base currency and selects one pair."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._client = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)

    async def get_exchange_rate(self, from_currency: str, to_currency: str) -> float:
        url = f"{self.base_url}/{self._api_key}/latest/{from_currency}"
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.error(
                f"Rate provider request failed: {type(e).__name__}",
                extra={"currency": from_currency},
            )
            raise ProviderError("Exchange rate provider unreachable") from e

        if response.status_code == httpx.codes.NOT_FOUND:
            raise CurrencyNotSupportedError(from_currency)
        if response.is_error:
            logger.error(
                f"Rate provider returned HTTP {response.status_code}",
                extra={"currency": from_currency, "status_code": response.status_code},
            )
            raise ProviderError(
                f"Exchange rate provider returned HTTP {response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError("Exchange rate provider returned invalid JSON") from e

        rate = select_rate(payload, from_currency, to_currency)
        logger.debug(f"Rate {from_currency}->{to_currency} = {rate}")
        return rate

    async def aclose(self) -> None:
        await self._client.aclose()
