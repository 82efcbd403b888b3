"""Helix over httpx (used whenever the runtime has TLS support)."""

import logging
from typing import Optional

import httpx

from core.settings import NotifyConfig
from twitchapi.transports.base import HelixTransport, QueryParams, TransportError

LOGGER = logging.getLogger(__name__)


class HttpxHelixTransport(HelixTransport):
    """Native HTTPS client"""

    name = "http"

    def __init__(
        self,
        config: NotifyConfig,
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        super().__init__(config, timeout)
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def get(self, resource: str, params: QueryParams) -> dict:
        url = self.url_for(resource, params)
        headers = self.headers()
        headers["Accept"] = "application/json"
        try:
            response = await self.http_client.get(url, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(f"{resource}: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{resource}: {e}") from e
        except ValueError as e:
            raise TransportError(f"{resource}: invalid JSON ({e})") from e

    async def close(self):
        if self._owns_client:
            await self.http_client.aclose()
