"""Notion API access and typed page properties."""

from .client import DEFAULT_BASE_URL, DEFAULT_NOTION_VERSION, NotionClient, RemoteDocumentClient
from .properties import (
    NumberValue,
    PageSnapshot,
    PropertyValue,
    RichTextValue,
    SelectValue,
    TitleValue,
    UnsupportedValue,
    decode_property,
    encode_properties,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_NOTION_VERSION",
    "NotionClient",
    "NumberValue",
    "PageSnapshot",
    "PropertyValue",
    "RemoteDocumentClient",
    "RichTextValue",
    "SelectValue",
    "TitleValue",
    "UnsupportedValue",
    "decode_property",
    "encode_properties",
]
