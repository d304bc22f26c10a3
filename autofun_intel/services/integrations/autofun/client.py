"""auto.fun REST API client."""

from typing import Any, Dict, List, Optional

import httpx

from autofun_intel.config import AutofunApiConfig, config
from autofun_intel.lib.logger import configure_logger

logger = configure_logger(__name__)


class AutofunApiError(Exception):
    """Exception raised for auto.fun API errors."""

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


class AutofunClient:
    """Asynchronous client for the public auto.fun API."""

    def __init__(
        self,
        settings: Optional[AutofunApiConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or config.autofun
        self.client = httpx.AsyncClient(
            base_url=self.settings.api_url,
            timeout=self.settings.request_timeout,
            headers={
                "User-Agent": "autofun-intel/0.1.0",
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def __aenter__(self) -> "AutofunClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = await self.client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AutofunApiError(
                f"HTTP {e.response.status_code} error for {path}",
                status_code=e.response.status_code,
                endpoint=path,
            ) from e
        except httpx.HTTPError as e:
            raise AutofunApiError(f"Request error for {path}: {str(e)}", endpoint=path) from e
        return response.json()

    async def list_tokens(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """List featured tokens; each token carries at least a `mint`."""
        payload = await self._get(
            "/api/tokens",
            params={
                "limit": limit or self.settings.token_limit,
                "sortBy": "featured",
                "sortOrder": "desc",
            },
        )
        if isinstance(payload, list):
            return payload
        return payload.get("tokens", [])

    async def get_messages(
        self, mint: str, limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Fetch the latest chat messages posted in a token's room."""
        payload = await self._get(
            f"/api/messages/{mint}",
            params={"limit": limit or self.settings.message_limit},
        )
        if isinstance(payload, list):
            return payload
        return payload.get("messages", [])
