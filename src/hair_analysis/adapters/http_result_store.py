"""Result store that talks to a remote ``/api/data`` endpoint."""

from dataclasses import dataclass

import httpx
from pydantic import JsonValue

from hair_analysis.services.results import ResultStore, ResultStoreError


@dataclass
class HttpxResultStore(ResultStore):
    """HTTPX client for a result slot hosted by another process."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxResultStore":
        """Create a store client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def get(self) -> JsonValue:
        """Fetch the current payload."""
        try:
            response = await self.http_client.get(self._url, timeout=10)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ResultStoreError("Failed to read data") from exc
        if payload == {}:
            return None
        return payload

    async def put(self, payload: JsonValue) -> None:
        """Overwrite the remote slot."""
        try:
            response = await self.http_client.post(self._url, json=payload, timeout=10)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ResultStoreError("Failed to write data") from exc

    async def clear(self) -> None:
        """Empty the remote slot."""
        try:
            response = await self.http_client.delete(self._url, timeout=10)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ResultStoreError("Failed to clear data") from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    @property
    def _url(self) -> str:
        return f"{self.base_url}/api/data"
