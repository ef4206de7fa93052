"""
HTTP transport for the ledger node.

Defines the seam where concrete HTTP implementations plug in. The algod
client depends on this protocol, not on httpx directly, so the transport
can be swapped for a fake without touching response parsing.

Concrete implementations:
    - HttpxTransport (default, uses httpx.AsyncClient)
    - FakeTransport (tests, returns canned responses)

Error mapping (HttpxTransport):
    - httpx.TimeoutException → NetworkError(reason=TIMEOUT)
    - httpx.ConnectError → NetworkError(reason=CONNECTION_FAILED)
    - other httpx.HTTPError → NetworkError(reason=HTTP_ERROR)
    - status >= 400 → NetworkError(reason=HTTP_ERROR)
    - body not a JSON object → NetworkError(reason=INVALID_JSON)
"""

from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

import httpx

from algopay.errors import NetworkError, NetworkFailureReason


@runtime_checkable
class HttpTransport(Protocol):
    """Async transport for the node's REST endpoints."""

    async def get_json(self, url: str, headers: dict[str, str]) -> dict[str, Any]:
        """GET ``url`` and return the parsed JSON object."""
        ...

    async def post_bytes(
        self,
        url: str,
        body: bytes,
        headers: dict[str, str],
    ) -> dict[str, Any]:
        """POST raw ``body`` to ``url`` and return the parsed JSON object."""
        ...


class HttpxTransport:
    """Default transport using httpx.AsyncClient.

    A fresh client is opened per request; flows are short and
    sequential, so there is no pool to share.

    Args:
        timeout_s: Request timeout in seconds.
    """

    def __init__(self, timeout_s: float = 30.0) -> None:
        self._timeout_s = timeout_s

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    async def get_json(self, url: str, headers: dict[str, str]) -> dict[str, Any]:
        return await self._request("GET", url, headers=headers)

    async def post_bytes(
        self,
        url: str,
        body: bytes,
        headers: dict[str, str],
    ) -> dict[str, Any]:
        return await self._request("POST", url, headers=headers, content=body)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        content: bytes | None = None,
    ) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                response = await client.request(
                    method,
                    url,
                    content=content,
                    headers={"Accept": "application/json", **headers},
                )
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"HTTP request timed out after {self._timeout_s}s",
                details={
                    "reason": NetworkFailureReason.TIMEOUT,
                    "url": url,
                    "timeout_s": self._timeout_s,
                },
            ) from e
        except httpx.ConnectError as e:
            raise NetworkError(
                f"Failed to connect to {url}",
                details={
                    "reason": NetworkFailureReason.CONNECTION_FAILED,
                    "url": url,
                },
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"HTTP error: {e}",
                details={
                    "reason": NetworkFailureReason.HTTP_ERROR,
                    "url": url,
                    "error": str(e),
                },
            ) from e

        if response.status_code >= 400:
            raise NetworkError(
                f"HTTP {response.status_code}: {_error_message(response)}",
                details={
                    "reason": NetworkFailureReason.HTTP_ERROR,
                    "url": url,
                    "status_code": response.status_code,
                },
            )

        try:
            result = response.json()
        except json.JSONDecodeError as e:
            raise NetworkError(
                "Response was not valid JSON",
                details={
                    "reason": NetworkFailureReason.INVALID_JSON,
                    "url": url,
                    "body_preview": response.text[:200] if response.text else "",
                },
            ) from e

        if not isinstance(result, dict):
            raise NetworkError(
                "Response JSON was not an object",
                details={
                    "reason": NetworkFailureReason.INVALID_JSON,
                    "url": url,
                    "type": type(result).__name__,
                },
            )
        return result


def _error_message(response: httpx.Response) -> str:
    """Prefer the node's ``{"message": ...}`` body over the reason phrase."""
    try:
        body = response.json()
    except json.JSONDecodeError:
        return response.reason_phrase
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return response.reason_phrase
