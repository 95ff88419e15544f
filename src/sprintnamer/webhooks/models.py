"""Webhook event models for inbound Notion deliveries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

PAGE_CREATED = "page.created"

OutcomeStatus = Literal["handshake", "ignored", "filtered", "scheduled", "queue_full"]


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _id_or_none(value: Any) -> str | None:
    """Stripped id, or None when missing or blank."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class EventParent(BaseModel):
    """Parent of the entity an event refers to.

    Attributes:
        id: Parent database (or page) id.
        data_source_id: Parent data source id, on API versions that send one.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    data_source_id: str | None = None


class WebhookEvent(BaseModel):
    """A single webhook delivery, built per request and never persisted.

    Attributes:
        type: Event type, e.g. ``page.created``.
        entity_id: Id of the page/database the event is about.
        parent: Parent of that entity, when the payload includes it.
        api_version: API version the event was rendered with.
        event_id: Notion's id for this event.
        timestamp: ISO-8601 time the event occurred.
        raw_body: Request body exactly as received.
        signature: Value of the ``X-Notion-Signature`` header.
    """

    model_config = ConfigDict(frozen=True)

    type: str | None = None
    entity_id: str | None = None
    parent: EventParent | None = None
    api_version: str | None = None
    event_id: str | None = None
    timestamp: str | None = None
    raw_body: str = Field(default="", repr=False)
    signature: str | None = Field(default=None, repr=False)

    @classmethod
    def from_payload(
        cls,
        payload: Any,
        raw_body: str = "",
        signature: str | None = None,
    ) -> WebhookEvent:
        """Extract the fields the ingress cares about from a parsed body.

        Non-object payloads produce an event with no type, which never qualifies.
        The parent is read from ``data.parent`` and falls back to a top-level
        ``parent`` object.
        """
        if not isinstance(payload, Mapping):
            return cls(raw_body=raw_body, signature=signature)

        entity = payload.get("entity")
        entity_id = _id_or_none(entity.get("id")) if isinstance(entity, Mapping) else None

        data = payload.get("data")
        raw_parent = data.get("parent") if isinstance(data, Mapping) else None
        if not isinstance(raw_parent, Mapping):
            raw_parent = payload.get("parent")

        parent = None
        if isinstance(raw_parent, Mapping):
            parent = EventParent(
                id=_str_or_none(raw_parent.get("id")),
                data_source_id=_str_or_none(raw_parent.get("data_source_id")),
            )

        return cls(
            type=_str_or_none(payload.get("type")),
            entity_id=entity_id,
            parent=parent,
            api_version=_str_or_none(payload.get("api_version")),
            event_id=_str_or_none(payload.get("id")),
            timestamp=_str_or_none(payload.get("timestamp")),
            raw_body=raw_body,
            signature=signature,
        )

    @property
    def is_page_created(self) -> bool:
        """True for ``page.created`` events that name a page."""
        return self.type == PAGE_CREATED and bool(self.entity_id)


class WebhookOutcome(BaseModel):
    """How the ingress disposed of a delivery. Always acknowledged with ``{ok: true}``.

    Attributes:
        status: ``handshake``, ``ignored``, ``filtered``, ``scheduled`` or ``queue_full``.
        event_type: Event type, when known.
        entity_id: Entity id, when known.
    """

    model_config = ConfigDict(frozen=True)

    status: OutcomeStatus
    event_type: str | None = None
    entity_id: str | None = None
