"""HTTP transport for azsize API calls."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from azsize.auth import auth_headers
from azsize.errors import APIError, MalformedResponseError, RateLimitError, RequestError, RequestTimeoutError

logger = logging.getLogger(__name__)

RequestParams = Mapping[str, str | int | float | bool]


class AzSizeTransport:
    """Async transport attaching the optional API key and mapping failures to azsize errors."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float,
        verify_tls: bool,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._headers = auth_headers(api_key)
        self._owns_http_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout),
            verify=verify_tls,
            follow_redirects=True,
        )

    @property
    def authenticated(self) -> bool:
        return bool(self._headers)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._client.aclose()

    def _url(self, path: str) -> str:
        # A shared client may carry its own base_url; build absolute URLs so ours wins.
        return f"{self._base_url}/{path.lstrip('/')}"

    async def get_json(self, path: str, *, params: RequestParams | None = None) -> dict[str, Any]:
        headers = {"Accept": "application/json", **self._headers}
        logger.debug("GET %s params=%s authenticated=%s", path, dict(params or {}), self.authenticated)

        try:
            response = await self._client.get(self._url(path), params=params, headers=headers)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"Failed to fetch availability: request timed out ({exc})") from exc
        except httpx.HTTPError as exc:
            raise RequestError(f"Failed to fetch availability: {exc}") from exc

        if response.status_code == 429:
            raise RateLimitError(body=response.text.strip() or None)

        if response.status_code >= 400:
            raise APIError(
                status_code=response.status_code,
                message="request failed",
                body=response.text.strip() or None,
            )

        try:
            decoded = response.json()
        except ValueError as exc:
            raise MalformedResponseError("response was not valid JSON") from exc

        if not isinstance(decoded, dict):
            raise MalformedResponseError("response payload must be a JSON object")

        return decoded
