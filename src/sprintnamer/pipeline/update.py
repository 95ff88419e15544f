"""Idempotent application of generated sprint names to Notion pages.

The generator version written to the page doubles as an idempotency marker:
if the page already carries the current version, the write is skipped. This
makes redelivered webhooks and repeated direct calls safe to re-run without
duplicate writes or flapping titles.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sprintnamer.exceptions import InvalidInputError
from sprintnamer.logging import get_logger
from sprintnamer.naming import NAME_PREFIX, GeneratedName, NameGenerator
from sprintnamer.notion import (
    PageSnapshot,
    PropertyValue,
    RemoteDocumentClient,
    RichTextValue,
    TitleValue,
)

logger = get_logger(__name__)


class PropertyMapping(BaseModel):
    """Which page properties receive which part of the generated name.

    Each mapping is independently optional; an unset or blank name means
    the field is not written.

    Attributes:
        name_property: Title property that receives ``Sprint <slug> - <seed>``.
        slug_property: Text property that receives the slug.
        version_property: Text property that receives the generator version.
    """

    model_config = ConfigDict(frozen=True)

    name_property: str | None = Field(default=None)
    slug_property: str | None = Field(default=None)
    version_property: str | None = Field(default=None)

    @field_validator("name_property", "slug_property", "version_property", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


def compose_label(slug: str, seed: str) -> str:
    """Title written to the page: ``Sprint <slug> - <seed>``."""
    return f"{NAME_PREFIX}{slug} - {seed}"


@dataclass(frozen=True)
class UpdateIntent:
    """Properties a pipeline run wants to write to a page."""

    page_id: str
    seed: str
    generated: GeneratedName
    properties: dict[str, PropertyValue] = field(default_factory=dict)


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of ``UpdatePipeline.apply``.

    Attributes:
        page_id: Target page.
        skipped: True when no remote write happened.
        reason: Why the write was skipped, if it was.
        slug: Generated slug (set when written).
        generator_version: Generator version (set when written).
    """

    page_id: str
    skipped: bool
    reason: str | None = None
    slug: str | None = None
    generator_version: str | None = None


class UpdatePipeline:
    """Generates a sprint name for a seed and writes it to a page once per version."""

    def __init__(
        self,
        generator: NameGenerator,
        client: RemoteDocumentClient,
        mapping: PropertyMapping,
    ) -> None:
        self._generator = generator
        self._client = client
        self._mapping = mapping

    @property
    def mapping(self) -> PropertyMapping:
        return self._mapping

    def build_intent(self, page_id: str, seed: str) -> UpdateIntent:
        """Generate the name for ``seed`` and the property patch for ``page_id``.

        Raises:
            InvalidInputError: If page_id or seed is blank.
        """
        if not isinstance(page_id, str) or not page_id.strip():
            raise InvalidInputError("page_id", "`page_id` is required")

        generated = self._generator.generate(seed)
        properties: dict[str, PropertyValue] = {}
        if self._mapping.name_property:
            properties[self._mapping.name_property] = TitleValue(
                text=compose_label(generated.slug, seed)
            )
        if self._mapping.slug_property:
            properties[self._mapping.slug_property] = RichTextValue(text=generated.slug)
        if self._mapping.version_property:
            properties[self._mapping.version_property] = RichTextValue(
                text=generated.generator_version
            )

        return UpdateIntent(
            page_id=page_id.strip(), seed=seed, generated=generated, properties=properties
        )

    def is_already_processed(self, snapshot: PageSnapshot | None) -> bool:
        """True if ``snapshot`` already stores the current generator version."""
        if snapshot is None or not self._mapping.version_property:
            return False
        stored = snapshot.plain_text(self._mapping.version_property)
        return stored == self._generator.version

    async def apply(
        self,
        page_id: str,
        seed: str,
        existing_snapshot: PageSnapshot | None = None,
    ) -> UpdateResult:
        """Write the generated name to ``page_id`` unless already done.

        When a version mapping is configured and no snapshot is given, the
        page is fetched first so the idempotency check always runs.

        Args:
            page_id: Target page.
            seed: Seed for the name generator.
            existing_snapshot: Page state already fetched by the caller.

        Returns:
            UpdateResult describing what happened.

        Raises:
            InvalidInputError: If page_id or seed is invalid.
            UpstreamError: If the Notion API fails.
        """
        intent = self.build_intent(page_id, seed)

        snapshot = existing_snapshot
        if snapshot is None and self._mapping.version_property:
            snapshot = await self._client.get_page(intent.page_id)

        if self.is_already_processed(snapshot):
            logger.info(
                "Page already has current generator version, skipping",
                page_id=intent.page_id,
                generator_version=intent.generated.generator_version,
            )
            return UpdateResult(page_id=intent.page_id, skipped=True, reason="already_processed")

        if not intent.properties:
            logger.warning("No output properties configured", page_id=intent.page_id)
            return UpdateResult(page_id=intent.page_id, skipped=True, reason="no_properties")

        await self._client.update_page(intent.page_id, intent.properties)
        logger.info(
            "Sprint name applied",
            page_id=intent.page_id,
            slug=intent.generated.slug,
            generator_version=intent.generated.generator_version,
        )
        return UpdateResult(
            page_id=intent.page_id,
            skipped=False,
            slug=intent.generated.slug,
            generator_version=intent.generated.generator_version,
        )
