"""Typed Notion page property values.

Notion page properties are heterogeneous JSON objects discriminated by their
``type`` field. They are decoded here into one model per kind the service
reads or writes; anything else becomes ``UnsupportedValue`` so callers never
have to probe raw dictionaries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


def _rich_text_plain(segments: Any) -> str:
    """Concatenate the plain text of a Notion rich-text array."""
    if not isinstance(segments, list):
        return ""
    parts: list[str] = []
    for segment in segments:
        if not isinstance(segment, Mapping):
            continue
        plain = segment.get("plain_text")
        if isinstance(plain, str):
            parts.append(plain)
            continue
        text = segment.get("text")
        if isinstance(text, Mapping) and isinstance(text.get("content"), str):
            parts.append(text["content"])
    return "".join(parts)


def _rich_text_payload(text: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": text}}]


class TitleValue(BaseModel):
    """A ``title`` property (every database has exactly one)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["title"] = "title"
    text: str = ""

    def plain_text(self) -> str:
        return self.text

    def to_notion(self) -> dict[str, Any]:
        return {"title": _rich_text_payload(self.text)}


class RichTextValue(BaseModel):
    """A ``rich_text`` property, flattened to plain text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rich_text"] = "rich_text"
    text: str = ""

    def plain_text(self) -> str:
        return self.text

    def to_notion(self) -> dict[str, Any]:
        return {"rich_text": _rich_text_payload(self.text)}


class NumberValue(BaseModel):
    """A ``number`` property."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    value: int | float | None = None

    def plain_text(self) -> str:
        return "" if self.value is None else str(self.value)

    def to_notion(self) -> dict[str, Any]:
        return {"number": self.value}


class SelectValue(BaseModel):
    """A ``select`` property; ``name`` is None when nothing is selected."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["select"] = "select"
    name: str | None = None

    def plain_text(self) -> str:
        return self.name or ""

    def to_notion(self) -> dict[str, Any]:
        return {"select": None if self.name is None else {"name": self.name}}


class UnsupportedValue(BaseModel):
    """Any property kind the service does not interpret (date, people, ...)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unsupported"] = "unsupported"
    notion_type: str = "unknown"

    def plain_text(self) -> str:
        return ""

    def to_notion(self) -> dict[str, Any]:
        raise ValueError(f"Cannot write unsupported Notion property type: {self.notion_type}")


PropertyValue = Annotated[
    TitleValue | RichTextValue | NumberValue | SelectValue | UnsupportedValue,
    Field(discriminator="kind"),
]


def decode_property(raw: Any) -> PropertyValue:
    """Decode one property object from a Notion page response."""
    if not isinstance(raw, Mapping):
        return UnsupportedValue()

    notion_type = raw.get("type")
    if notion_type == "title":
        return TitleValue(text=_rich_text_plain(raw.get("title")))
    if notion_type == "rich_text":
        return RichTextValue(text=_rich_text_plain(raw.get("rich_text")))
    if notion_type == "number":
        number = raw.get("number")
        if isinstance(number, bool) or not isinstance(number, (int, float)):
            number = None
        return NumberValue(value=number)
    if notion_type == "select":
        select = raw.get("select")
        name = select.get("name") if isinstance(select, Mapping) else None
        return SelectValue(name=name if isinstance(name, str) else None)
    return UnsupportedValue(notion_type=str(notion_type or "unknown"))


def encode_properties(properties: Mapping[str, PropertyValue]) -> dict[str, Any]:
    """Encode property values into the body of a Notion page PATCH."""
    return {name: value.to_notion() for name, value in properties.items()}


class PageSnapshot(BaseModel):
    """Current state of a Notion page, fetched once per update attempt.

    Attributes:
        id: Page id.
        parent_id: Database (or parent page) id, if any.
        data_source_id: Data source id, on API versions that report one.
        properties: Decoded property values keyed by property name.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    parent_id: str | None = None
    data_source_id: str | None = None
    properties: dict[str, PropertyValue] = Field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> PageSnapshot:
        """Build a snapshot from a ``GET /v1/pages/{id}`` response body."""
        parent = payload.get("parent")
        parent_id: str | None = None
        data_source_id: str | None = None
        if isinstance(parent, Mapping):
            parent_id = parent.get("database_id") or parent.get("page_id")
            data_source_id = parent.get("data_source_id")

        raw_properties = payload.get("properties")
        properties: dict[str, PropertyValue] = {}
        if isinstance(raw_properties, Mapping):
            properties = {
                str(name): decode_property(raw) for name, raw in raw_properties.items()
            }

        return cls(
            id=str(payload.get("id", "")),
            parent_id=parent_id,
            data_source_id=data_source_id,
            properties=properties,
        )

    def plain_text(self, name: str | None) -> str | None:
        """Plain text of property ``name``, or None if absent or unnamed."""
        if not name:
            return None
        value = self.properties.get(name)
        return None if value is None else value.plain_text()

    def title_text(self) -> str | None:
        """Plain text of the page's title property, if it has one."""
        for value in self.properties.values():
            if isinstance(value, TitleValue):
                return value.text
        return None
