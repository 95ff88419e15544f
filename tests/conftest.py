"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

# Add tests directory to path so helpers can be imported
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from sprintnamer.jobs import JobDispatcher  # noqa: E402
from sprintnamer.naming import ADJECTIVES, NOUNS, NameGenerator  # noqa: E402
from sprintnamer.notion import PageSnapshot  # noqa: E402
from sprintnamer.pipeline import PropertyMapping, UpdatePipeline  # noqa: E402

GENERATOR_VERSION = "1.0.0"
PAGE_ID = "2f1c6a4e-8d0b-4c1e-9f3a-5b7d2e8c1a90"
DATABASE_ID = "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d"


def make_page_payload(
    page_id: str = PAGE_ID,
    title: str = "",
    properties: dict[str, Any] | None = None,
    database_id: str | None = DATABASE_ID,
) -> dict[str, Any]:
    """Build a Notion ``GET /pages/{id}`` response body.

    Args:
        page_id: Page id.
        title: Plain text of the ``Name`` title property.
        properties: Extra raw property objects keyed by name.
        database_id: Parent database id (None for a top-level page).

    Returns:
        A dict shaped like Notion's page object.
    """
    raw_properties: dict[str, Any] = {
        "Name": {
            "id": "title",
            "type": "title",
            "title": [
                {"type": "text", "text": {"content": title}, "plain_text": title}
            ],
        }
    }
    raw_properties.update(properties or {})
    parent: dict[str, Any] = (
        {"type": "database_id", "database_id": database_id}
        if database_id
        else {"type": "workspace", "workspace": True}
    )
    return {"object": "page", "id": page_id, "parent": parent, "properties": raw_properties}


def rich_text(text: str) -> dict[str, Any]:
    """Raw Notion rich_text property object."""
    return {
        "type": "rich_text",
        "rich_text": [{"type": "text", "text": {"content": text}, "plain_text": text}],
    }


def make_snapshot(**kwargs: Any) -> PageSnapshot:
    """Decoded snapshot of ``make_page_payload(**kwargs)``."""
    return PageSnapshot.from_api(make_page_payload(**kwargs))


@pytest.fixture
def generator() -> NameGenerator:
    """Name generator with the bundled word lists."""
    return NameGenerator(ADJECTIVES, NOUNS, GENERATOR_VERSION)


@pytest.fixture
def mock_client() -> AsyncMock:
    """Mock RemoteDocumentClient returning an untouched page."""
    client = AsyncMock()
    client.get_page = AsyncMock(return_value=make_snapshot())
    client.update_page = AsyncMock(return_value=None)
    return client


@pytest.fixture
def mapping() -> PropertyMapping:
    """Mapping that writes all three output properties."""
    return PropertyMapping(
        name_property="Name",
        slug_property="Sprint Slug",
        version_property="Generator Version",
    )


@pytest.fixture
def pipeline(
    generator: NameGenerator, mock_client: AsyncMock, mapping: PropertyMapping
) -> UpdatePipeline:
    """Update pipeline over the mock client."""
    return UpdatePipeline(generator, mock_client, mapping)


@pytest.fixture
def dispatcher() -> JobDispatcher:
    """Dispatcher with a small capacity."""
    return JobDispatcher(max_pending=5)
