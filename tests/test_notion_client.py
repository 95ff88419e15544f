"""Tests for the Notion API client."""

from __future__ import annotations

import json

import httpx
import pytest

from conftest import PAGE_ID, make_page_payload, rich_text
from sprintnamer.exceptions import ConfigurationError, InvalidInputError, UpstreamError
from sprintnamer.notion import NotionClient, RichTextValue, TitleValue


def make_client(handler, **kwargs) -> NotionClient:
    """NotionClient whose requests are answered by ``handler``."""
    return NotionClient(token="secret_token", transport=httpx.MockTransport(handler), **kwargs)


class TestGetPage:
    """Tests for NotionClient.get_page."""

    @pytest.mark.asyncio
    async def test_fetches_and_decodes(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            payload = make_page_payload(
                title="2026_W04", properties={"Sprint Slug": rich_text("bold-otter")}
            )
            return httpx.Response(200, json=payload)

        async with make_client(handler) as client:
            snapshot = await client.get_page(PAGE_ID)

        assert snapshot.id == PAGE_ID
        assert snapshot.plain_text("Sprint Slug") == "bold-otter"

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == f"/v1/pages/{PAGE_ID}"
        assert request.headers["Authorization"] == "Bearer secret_token"
        assert request.headers["Notion-Version"] == "2022-06-28"

    @pytest.mark.asyncio
    async def test_custom_version_and_base_url(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=make_page_payload())

        client = make_client(
            handler, notion_version="2025-09-03", base_url="http://notion.test/api/"
        )
        await client.get_page(PAGE_ID)
        await client.aclose()

        assert str(seen[0].url) == f"http://notion.test/api/pages/{PAGE_ID}"
        assert seen[0].headers["Notion-Version"] == "2025-09-03"

    @pytest.mark.asyncio
    async def test_not_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"object": "error", "code": "object_not_found"})

        async with make_client(handler) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.get_page(PAGE_ID)

        assert exc_info.value.status == 404
        assert "object_not_found" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_error_body_truncated(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="x" * 5000)

        async with make_client(handler) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.get_page(PAGE_ID)

        assert len(exc_info.value.body) == 1000

    @pytest.mark.asyncio
    async def test_non_object_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["not", "a", "page"])

        async with make_client(handler) as client:
            with pytest.raises(UpstreamError):
                await client.get_page(PAGE_ID)

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.get_page(PAGE_ID)

        assert exc_info.value.status is None

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        async with make_client(handler) as client:
            with pytest.raises(UpstreamError, match="timed out"):
                await client.get_page(PAGE_ID)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_id", ["", "   "])
    async def test_blank_page_id(self, page_id):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        async with make_client(handler) as client:
            with pytest.raises(InvalidInputError):
                await client.get_page(page_id)


class TestUpdatePage:
    """Tests for NotionClient.update_page."""

    @pytest.mark.asyncio
    async def test_patches_properties(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=make_page_payload())

        async with make_client(handler) as client:
            result = await client.update_page(
                PAGE_ID,
                {
                    "Name": TitleValue(text="Sprint bold-otter - 2026_W04"),
                    "Sprint Slug": RichTextValue(text="bold-otter"),
                },
            )

        assert result is None
        request = seen[0]
        assert request.method == "PATCH"
        assert request.url.path == f"/v1/pages/{PAGE_ID}"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {
            "properties": {
                "Name": {
                    "title": [
                        {"type": "text", "text": {"content": "Sprint bold-otter - 2026_W04"}}
                    ]
                },
                "Sprint Slug": {"rich_text": [{"type": "text", "text": {"content": "bold-otter"}}]},
            }
        }

    @pytest.mark.asyncio
    async def test_rejected_update(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"code": "validation_error"})

        async with make_client(handler) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.update_page(PAGE_ID, {"Sprint Slug": RichTextValue(text="x")})

        assert exc_info.value.status == 400

    @pytest.mark.asyncio
    async def test_empty_response_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(204)

        async with make_client(handler) as client:
            await client.update_page(PAGE_ID, {"Sprint Slug": RichTextValue(text="x")})


class TestConstruction:
    """Tests for NotionClient construction."""

    @pytest.mark.parametrize("token", ["", "   "])
    def test_blank_token(self, token):
        with pytest.raises(ConfigurationError):
            NotionClient(token=token)
