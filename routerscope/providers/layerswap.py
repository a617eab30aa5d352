"""
LayerSwap networks API client.

One request returns every supported network together with its token list
(symbol, contract, decimals, logo, USD price), which is all the registry needs.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from .base import TokenMetadataSource
from ..config import settings
from ..types.tokens import NetworkDescriptor


class LayerSwapProvider(TokenMetadataSource):
    """Token metadata source backed by the LayerSwap networks endpoint."""

    name = "layerswap"

    NETWORKS_PATH = "/api/v2/networks"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = settings.layerswap_api_key if api_key is None else api_key
        self.base_url = (base_url or settings.layerswap_base_url).rstrip("/")
        self.timeout_s = timeout_s or settings.token_registry_timeout_seconds
        self._transport = transport

    def _build_headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json"}
        if self.api_key:
            headers["X-LS-APIKEY"] = self.api_key
        return headers

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self._transport)

    async def ready(self) -> bool:
        return settings.enable_token_registry and bool(self.api_key)

    async def health_check(self) -> Dict[str, Any]:
        """Configuration-only status.

        The networks endpoint is the only one LayerSwap offers for this data and
        it is fetched once per process, so health never calls it.
        """
        if not await self.ready():
            return {"status": "unavailable", "reason": "Provider disabled or API key missing"}
        return {"status": "healthy", "base_url": self.base_url}

    async def fetch_networks(self) -> List[NetworkDescriptor]:
        async with self._client(timeout=self.timeout_s) as client:
            resp = await client.get(
                f"{self.base_url}{self.NETWORKS_PATH}",
                headers=self._build_headers(),
            )
            resp.raise_for_status()
            payload = resp.json()

        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise ValueError("LayerSwap response is missing the 'data' network list")

        return [NetworkDescriptor.from_api(item) for item in payload["data"] if isinstance(item, dict)]
