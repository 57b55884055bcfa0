"""
Transport protocol for TRON node HTTP calls.

The builder and broadcaster depend on ``NodeTransport``, not on httpx
directly, so tests can plug in a fake that returns canned node
responses.

Concrete implementations:
    - HttpxTransport (default, one httpx.AsyncClient per call)
    - FakeTransport (tests)

Each call is independent: no pooled session, no shared state between
concurrent transfers. Every failure is raised as ``NodeTransportError``
with one of the codes TIMEOUT, CONNECTION_FAILED, HTTP_ERROR,
INVALID_JSON. Nothing here retries.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from trc20_sender.errors import NodeTransportError

logger = logging.getLogger(__name__)


@runtime_checkable
class NodeTransport(Protocol):
    """Async transport for JSON POST requests to the node."""

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST ``payload`` as JSON and return the decoded response object.

        Raises:
            NodeTransportError: On timeout, connection failure, HTTP error
                status, or a body that is not a JSON object.
        """
        ...


class HttpxTransport:
    """Default transport using httpx.AsyncClient.

    Args:
        timeout: Request timeout in seconds, applied to every call.
        headers: Extra headers sent with every request (e.g. API key).
    """

    def __init__(
        self,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._timeout = timeout
        self._headers = headers or {}

    @property
    def timeout(self) -> float:
        return self._timeout

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send a JSON POST via httpx and return the parsed object."""
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                        **self._headers,
                    },
                )
        except httpx.TimeoutException as e:
            raise NodeTransportError(
                f"request to {url} timed out after {self._timeout}s",
                error_code="TIMEOUT",
                details={"url": url, "timeout_s": self._timeout},
            ) from e
        except httpx.ConnectError as e:
            raise NodeTransportError(
                f"failed to connect to {url}",
                error_code="CONNECTION_FAILED",
                details={"url": url},
            ) from e
        except httpx.HTTPError as e:
            raise NodeTransportError(
                f"HTTP error: {e}",
                error_code="HTTP_ERROR",
                details={"url": url, "error": str(e)},
            ) from e

        if response.status_code >= 400:
            raise NodeTransportError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                error_code="HTTP_ERROR",
                details={
                    "url": url,
                    "status_code": response.status_code,
                    "body_preview": response.text[:200] if response.text else "",
                },
            )

        try:
            result = response.json()
        except ValueError as e:  # bad JSON or a body that is not UTF-8
            raise NodeTransportError(
                "response was not valid JSON",
                error_code="INVALID_JSON",
                details={
                    "url": url,
                    "body_preview": response.text[:200] if response.text else "",
                },
            ) from e

        if not isinstance(result, dict):
            raise NodeTransportError(
                "response JSON was not an object",
                error_code="INVALID_JSON",
                details={"url": url, "type": type(result).__name__},
            )

        logger.debug("POST %s -> HTTP %s", url, response.status_code)
        return result
