"""HTTP gateway for the ingestion server's REST API."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from akavelog_ui.errors import ApiError
from akavelog_ui.logging_config import get_logger

logger = get_logger(name=__name__)


def _truncate(value: str, max_len: int = 1500) -> str:
    if len(value) <= max_len:
        return value
    return f"{value[:max_len]}..."


class ApiGateway:
    """Issues JSON requests against ``base_url`` and maps every failure to ``ApiError``.

    A fresh ``httpx.AsyncClient`` is opened per request. ``transport`` is
    handed to each client, which lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def url(self, path: str) -> str:
        normalized = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{normalized}"

    async def _send(
        self,
        method: str,
        path: str,
        *,
        payload: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        url = self.url(path)
        logger.debug("{} {}", method, url)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.request(method=method, url=url, json=payload)
        except httpx.TimeoutException as exc:
            raise ApiError(
                "API request timed out",
                details={"timeout_seconds": self.timeout_seconds, "url": url},
            ) from exc
        except httpx.InvalidURL as exc:
            raise ApiError(
                f"Invalid API URL: {exc}",
                details={"reason": str(exc), "url": url},
            ) from exc
        except httpx.HTTPError as exc:
            raise ApiError(
                f"API is unavailable: {exc}",
                details={"reason": str(exc), "url": url},
            ) from exc

        if response.status_code >= 400:
            body = _truncate(response.text or "")
            logger.debug("{} {} -> {}", method, url, response.status_code)
            raise ApiError(
                body,
                status=response.status_code,
                details={"url": url, "upstream_status": response.status_code},
            )

        return response

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        response = await self._send(method, path, payload=payload)

        try:
            payload_json = response.json()
        except ValueError as exc:
            raise ApiError(
                "API returned invalid JSON",
                status=response.status_code,
                details={"url": str(response.request.url)},
            ) from exc

        if not isinstance(payload_json, dict):
            raise ApiError(
                "API returned an unexpected payload shape",
                status=response.status_code,
                details={"payload_type": type(payload_json).__name__},
            )

        return payload_json

    async def get_json(self, path: str) -> Dict[str, Any]:
        return await self._request_json("GET", path)

    async def post_json(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request_json("POST", path, payload=payload)

    async def post(self, path: str, payload: Dict[str, Any]) -> None:
        """POST where the success response body is ignored."""
        await self._send("POST", path, payload=payload)
