"""Contacts directory client."""

from typing import Any, Protocol

import httpx

from ..core import LookupFailedError


class DirectoryService(Protocol):
    """Identity lookup by email or contact id."""

    async def query_by_email(self, email: str) -> dict[str, Any]:
        """Return ``{"items": [...]}`` of contacts matching the email."""
        ...

    async def get_by_id(self, contact_id: str) -> dict[str, Any]:
        """Return a single contact record."""
        ...


class HttpDirectoryClient:
    """Directory service backed by the contacts HTTP API."""

    def __init__(self, client: httpx.AsyncClient, base_url: str):
        self.client = client
        self.base_url = base_url.rstrip("/")

    async def query_by_email(self, email: str) -> dict[str, Any]:
        data = await self._get("/contacts", params={"email": email})
        items = data.get("items") if isinstance(data, dict) else None
        return {"items": items if isinstance(items, list) else []}

    async def get_by_id(self, contact_id: str) -> dict[str, Any]:
        data = await self._get(f"/contacts/{contact_id}")
        return data if isinstance(data, dict) else {}

    async def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise LookupFailedError(
                f"Directory returned {e.response.status_code} for {path}",
                service="directory",
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise LookupFailedError(f"Directory request failed: {e}", service="directory") from e
