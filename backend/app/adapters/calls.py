"""Provider HTTP call wrapper with metrics, structured logging and error mapping.

Every call to an external provider goes through `ProviderClient.get_json`:
- single attempt, no internal retry
- timeout taken from the injected httpx client
- transport, HTTP and decoding failures surface as ProviderError
- cancellation propagates untouched
"""

import time
from typing import Any

import httpx

from backend.app.errors import ProviderError


# Metrics interface (implemented by backend.app.utils.metrics)
class ProviderMetrics:
    """Interface for provider call metrics."""

    def record_latency(self, provider: str, outcome: str, latency_ms: float) -> None:
        """Record provider call latency."""
        pass

    def inc_error(self, provider: str, reason: str) -> None:
        """Increment error counter."""
        pass


# Logging interface (implemented by backend.app.utils.logging)
class ProviderLogger:
    """Interface for structured logging."""

    def log_call(
        self,
        provider: str,
        operation: str,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log provider call."""
        pass


class ProviderClient:
    """Thin JSON-over-HTTP client for one named provider."""

    def __init__(
        self,
        name: str,
        client: httpx.AsyncClient,
        metrics: ProviderMetrics | None = None,
        logger: ProviderLogger | None = None,
    ) -> None:
        """Initialize client.

        Args:
            name: Provider name used in metrics and logs (e.g. "google.directions")
            client: Shared httpx client (owns timeout and transport)
            metrics: Metrics recorder (optional, defaults to no-op)
            logger: Structured logger (optional, defaults to no-op)
        """
        self.name = name
        self._client = client
        self._metrics = metrics or ProviderMetrics()
        self._logger = logger or ProviderLogger()

    async def get_json(self, operation: str, url: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET a JSON document from the provider.

        Raises:
            ProviderError: On timeout, network failure, non-2xx status or invalid JSON
        """
        start = time.monotonic()
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            self._fail(operation, start, "timeout")
            raise ProviderError(f"{self.name} timed out") from e
        except httpx.HTTPStatusError as e:
            self._fail(operation, start, f"http_{e.response.status_code}")
            raise ProviderError(
                f"{self.name} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            self._fail(operation, start, type(e).__name__)
            raise ProviderError(f"{self.name} request failed: {type(e).__name__}") from e
        except ValueError as e:
            self._fail(operation, start, "invalid_json")
            raise ProviderError(f"{self.name} returned an unreadable response") from e

        if not isinstance(data, dict):
            self._fail(operation, start, "invalid_json")
            raise ProviderError(f"{self.name} returned an unreadable response")

        elapsed_ms = (time.monotonic() - start) * 1000
        self._metrics.record_latency(self.name, "success", elapsed_ms)
        self._logger.log_call(self.name, operation, "success", elapsed_ms)
        return data

    def reject(self, operation: str, status: str) -> None:
        """Record a provider-level rejection (well-formed response, error status)."""
        self._metrics.inc_error(self.name, status.lower())
        self._logger.log_call(self.name, operation, "rejected", 0.0, error_reason=status)

    def _fail(self, operation: str, start: float, reason: str) -> None:
        elapsed_ms = (time.monotonic() - start) * 1000
        self._metrics.record_latency(self.name, "error", elapsed_ms)
        self._metrics.inc_error(self.name, reason)
        self._logger.log_call(self.name, operation, "error", elapsed_ms, error_reason=reason)
