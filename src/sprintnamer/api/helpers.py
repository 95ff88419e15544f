"""Request parsing helpers for the naming endpoints.

Notion automations and no-code tools send inputs in a few shapes, so seeds
and page ids are accepted from headers first and from the JSON body second.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from fastapi import Request

from sprintnamer.exceptions import InvalidInputError
from sprintnamer.naming import is_strict_seed

SEED_HEADER = "x-notion-sprint-seed"
PAGE_ID_HEADER = "x-notion-page-id"
REQUEST_ID_HEADER = "x-request-id"

# Body keys checked for a page id, in order
_PAGE_ID_KEYS = ("page_id", "pageId", "id")


def new_request_id() -> str:
    return uuid4().hex


def get_request_id(request: Request) -> str:
    """Request id assigned by the request middleware (or a fresh one)."""
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id.strip():
        return request_id
    return new_request_id()


async def read_json_body(request: Request) -> Any:
    """Parse the request body as JSON. An empty body parses as None.

    Raises:
        InvalidInputError: If the body is not valid JSON.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise InvalidInputError("body", "Request body must be valid JSON") from e


def extract_seed(headers: Mapping[str, str], body: Any, *, strict: bool = False) -> str:
    """Seed from the ``X-Notion-Sprint-Seed`` header, else from body ``seed``.

    The seed is returned exactly as sent; whitespace only matters for the
    blank and format checks.

    Raises:
        InvalidInputError: If the seed is missing, not a string, blank, or
            (when ``strict``) not a ``YYYY_WNN`` token.
    """
    seed: Any = headers.get(SEED_HEADER)
    if seed is None and isinstance(body, Mapping):
        seed = body.get("seed")

    if seed is None:
        raise InvalidInputError("seed", "`seed` is required")
    if not isinstance(seed, str):
        raise InvalidInputError("seed", "`seed` must be a string")
    if not seed.strip():
        raise InvalidInputError("seed", "`seed` must be a non-empty string")
    if strict and not is_strict_seed(seed):
        raise InvalidInputError("seed", "`seed` must match format YYYY_WNN (e.g. 2026_W04)")
    return seed


def extract_page_id(headers: Mapping[str, str], body: Any) -> str:
    """Page id from ``X-Notion-Page-Id``, else body ``page_id``/``pageId``/``id``/``page.id``.

    Raises:
        InvalidInputError: If no non-blank page id is present.
    """
    header = headers.get(PAGE_ID_HEADER)
    if isinstance(header, str) and header.strip():
        return header.strip()

    if isinstance(body, Mapping):
        for key in _PAGE_ID_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        page = body.get("page")
        if isinstance(page, Mapping):
            value = page.get("id")
            if isinstance(value, str) and value.strip():
                return value.strip()

    raise InvalidInputError("page_id", "`page_id` is required")
