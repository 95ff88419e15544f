"""Async Notion API client.

Only the two page operations the update pipeline needs are implemented.
Failures are never retried here: on the webhook path Notion redelivers the
event itself, and on the direct path the caller decides.

Example:
    ```python
    async with NotionClient(token="secret_...") as notion:
        snapshot = await notion.get_page(page_id)
        await notion.update_page(page_id, {"Sprint Slug": RichTextValue(text="bold-otter")})
    ```
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from sprintnamer.exceptions import ConfigurationError, InvalidInputError, UpstreamError
from sprintnamer.logging import get_logger

from .properties import PageSnapshot, PropertyValue, encode_properties

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.notion.com/v1"
DEFAULT_NOTION_VERSION = "2022-06-28"

# Upper bound on response text kept on errors and in logs
_MAX_ERROR_BODY = 1000


class RemoteDocumentClient(Protocol):
    """What the update pipeline needs from a document store."""

    async def get_page(self, page_id: str) -> PageSnapshot: ...

    async def update_page(self, page_id: str, properties: Mapping[str, PropertyValue]) -> None: ...


def _require_page_id(page_id: str) -> str:
    if not isinstance(page_id, str) or not page_id.strip():
        raise InvalidInputError("page_id", "`page_id` is required")
    return page_id.strip()


class NotionClient:
    """httpx-backed ``RemoteDocumentClient`` for the Notion REST API."""

    def __init__(
        self,
        token: str,
        notion_version: str = DEFAULT_NOTION_VERSION,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: Notion integration token.
            notion_version: Value of the ``Notion-Version`` header.
            base_url: API root, without trailing slash.
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport (tests use ``httpx.MockTransport``).

        Raises:
            ConfigurationError: If the token is blank.
        """
        if not token or not token.strip():
            raise ConfigurationError("Notion API token is required")

        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token.strip()}",
                "Notion-Version": notion_version,
                "Content-Type": "application/json",
            },
        )

    async def get_page(self, page_id: str) -> PageSnapshot:
        """Fetch a page and decode its properties.

        Raises:
            InvalidInputError: If page_id is blank.
            UpstreamError: On transport failure or a non-2xx response.
        """
        page_id = _require_page_id(page_id)
        payload = await self._request("GET", f"/pages/{quote(page_id, safe='')}")
        if not isinstance(payload, Mapping):
            raise UpstreamError("Notion API returned an unexpected page body", status=200)
        return PageSnapshot.from_api(payload)

    async def update_page(self, page_id: str, properties: Mapping[str, PropertyValue]) -> None:
        """Patch page properties.

        Raises:
            InvalidInputError: If page_id is blank.
            UpstreamError: On transport failure or a non-2xx response.
        """
        page_id = _require_page_id(page_id)
        await self._request(
            "PATCH",
            f"/pages/{quote(page_id, safe='')}",
            json={"properties": encode_properties(properties)},
        )

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Notion API request timed out: {method} {path}") from e
        except httpx.RequestError as e:
            raise UpstreamError(f"Notion API request failed: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            body = response.text[:_MAX_ERROR_BODY] if response.text else None
            logger.warning(
                "Notion API request rejected",
                method=method,
                path=path,
                status=response.status_code,
            )
            raise UpstreamError(
                f"Notion API request failed: {response.status_code}",
                status=response.status_code,
                body=body,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> NotionClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
