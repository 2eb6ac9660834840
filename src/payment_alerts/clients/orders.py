"""Subscription order client."""

from typing import Any, Protocol

import httpx

from ..core import LookupFailedError


class OrderService(Protocol):
    async def get_order(self, order_id: str) -> dict[str, Any]:
        ...


class HttpOrderClient:
    """Fetches pricing-plan orders over HTTP."""

    def __init__(self, client: httpx.AsyncClient, base_url: str):
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def get_order(self, order_id: str) -> dict[str, Any]:
        try:
            response = await self.client.get(f"{self.base_url}/orders/{order_id}")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise LookupFailedError(
                f"Order service returned {e.response.status_code} for {order_id}",
                service="orders",
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise LookupFailedError(f"Order request failed: {e}", service="orders") from e

        # Some deployments wrap the record as {"order": {...}}
        if isinstance(data, dict) and isinstance(data.get("order"), dict):
            return data["order"]
        return data if isinstance(data, dict) else {}
