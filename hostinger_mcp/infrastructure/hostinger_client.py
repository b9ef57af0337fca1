 # hostinger_client.py
 # - Hostinger API integration adapter (the single external collaborator)
 # - Bearer-token REST calls; standardized error wrapping, no retries

import logging
from typing import Any, Dict, Optional

import httpx

from hostinger_mcp.config import Config
from hostinger_mcp.errors import HostingerAPIError

logger = logging.getLogger("mcp.hostinger")

_BODY_METHODS = {"POST", "PUT", "PATCH"}


class HostingerClient:
    """Async Hostinger REST client.

    ``invoke`` is the only capability the tool handlers rely on. Every call is
    ``METHOD {base_url}{path}`` with the bearer token; a JSON body is sent for
    mutating methods only. Non-2xx responses and transport failures raise
    ``HostingerAPIError``.
    """

    def __init__(self, base_url: str, api_key: str, *, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_config(cls, cfg: Config) -> "HostingerClient":
        return cls(cfg.base_url, cfg.api_key, timeout=cfg.http_timeout)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    async def invoke(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        method = method.upper()
        url = f"{self.base_url}{path}"
        kwargs: Dict[str, Any] = {}
        if body is not None and method in _BODY_METHODS:
            kwargs["json"] = body

        logger.debug(f"hostinger.request {method} {path}")
        try:
            r = await self._http.request(method, url, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise HostingerAPIError(f"API request failed: {e}") from e

        if not r.is_success:
            raise HostingerAPIError(f"API request failed: HTTP {r.status_code}: {r.text}", status=r.status_code)

        if not r.content:
            return {}
        try:
            return r.json()
        except ValueError as e:
            raise HostingerAPIError(f"API request failed: {e}", status=r.status_code) from e

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "HostingerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
