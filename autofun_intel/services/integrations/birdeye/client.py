"""Birdeye public API client."""

from typing import Any, Dict, Optional

import httpx

from autofun_intel.config import BirdeyeConfig, config
from autofun_intel.lib.logger import configure_logger

logger = configure_logger(__name__)


class BirdeyeApiError(Exception):
    """Exception raised for Birdeye API errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.endpoint = endpoint

    def __str__(self) -> str:
        details = []
        if self.status_code is not None:
            details.append(f"status_code={self.status_code}")
        if self.endpoint is not None:
            details.append(f"endpoint={self.endpoint}")
        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class BirdeyeClient:
    """Asynchronous client for the Birdeye public API.

    Use as an async context manager so the underlying connection pool is
    always closed:

        async with BirdeyeClient() as client:
            portfolio = await client.get_wallet_token_list(address)
    """

    def __init__(
        self,
        settings: Optional[BirdeyeConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or config.birdeye
        if not self.settings.api_key:
            raise BirdeyeApiError("Birdeye API key not configured")

        self.client = httpx.AsyncClient(
            base_url=self.settings.api_url,
            timeout=self.settings.request_timeout,
            headers={
                "Accept": "application/json",
                "X-API-KEY": self.settings.api_key,
                "x-chain": self.settings.chain,
            },
            transport=transport,
        )

    async def __aenter__(self) -> "BirdeyeClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    async def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self.client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BirdeyeApiError(
                "Birdeye request failed",
                status_code=e.response.status_code,
                endpoint=path,
            ) from e
        except httpx.HTTPError as e:
            raise BirdeyeApiError(f"Birdeye request error: {str(e)}", endpoint=path) from e

        payload = response.json()
        if not payload.get("success", False):
            raise BirdeyeApiError(
                payload.get("message") or "Birdeye returned an unsuccessful response",
                endpoint=path,
            )
        return payload.get("data") or {}

    async def get_wallet_token_list(self, wallet: str) -> Dict[str, Any]:
        """Return the wallet portfolio (`wallet`, `totalUsd`, `items`)."""
        logger.debug(f"Fetching Birdeye token list for wallet {wallet}")
        return await self._get("/v1/wallet/token_list", {"wallet": wallet})
