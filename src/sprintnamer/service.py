"""Sprint namer service: the composition root.

Builds the name generator, job dispatcher, Notion client, update pipeline and
webhook ingress from Settings and owns their lifetimes. The HTTP layer holds
one instance on ``app.state``; nothing is looked up globally.

Example:
    ```python
    from sprintnamer.service import SprintNamerService

    async with SprintNamerService.create(settings) as service:
        name = service.generator.generate("2026_W04")
        service.dispatcher.submit(lambda: service.pipeline.apply(page_id=pid, seed="2026_W04"))
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sprintnamer.config import Settings
from sprintnamer.exceptions import ConfigurationError
from sprintnamer.jobs import JobDispatcher
from sprintnamer.logging import get_logger
from sprintnamer.naming import NameGenerator
from sprintnamer.notion import NotionClient, RemoteDocumentClient
from sprintnamer.pipeline import UpdatePipeline
from sprintnamer.webhooks import WebhookIngress

logger = get_logger(__name__)


@dataclass
class SprintNamerService:
    """Wires the sprint namer components together.

    Attributes:
        settings: Configuration settings.
        generator: Deterministic name generator.
        dispatcher: Bounded background job dispatcher.
        client: Notion API client.
        pipeline: Idempotent page update pipeline.
        ingress: Webhook ingress.
    """

    settings: Settings
    generator: NameGenerator
    dispatcher: JobDispatcher
    client: RemoteDocumentClient
    pipeline: UpdatePipeline
    ingress: WebhookIngress

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        client: RemoteDocumentClient | None = None,
    ) -> SprintNamerService:
        """Create a service with default dependencies.

        Args:
            settings: Optional settings. Uses environment if None.
            client: Optional Notion client. Built from settings if None.

        Returns:
            Configured SprintNamerService instance.

        Raises:
            ConfigurationError: If the word lists or generator version are
                invalid, or no Notion token is configured.
        """
        if settings is None:
            settings = Settings()

        generator = NameGenerator(settings.adjectives, settings.nouns, settings.generator_version)
        dispatcher = JobDispatcher(max_pending=settings.async_max_pending)

        if client is None:
            if settings.notion_api_token is None:
                raise ConfigurationError("SPRINTNAMER_NOTION_API_TOKEN is required")
            client = NotionClient(
                token=settings.notion_api_token,
                notion_version=settings.notion_version,
                base_url=settings.notion_base_url,
                timeout_seconds=settings.notion_timeout_seconds,
            )

        pipeline = UpdatePipeline(generator, client, settings.property_mapping)
        ingress = WebhookIngress(
            dispatcher=dispatcher,
            pipeline=pipeline,
            client=client,
            verification_secret=settings.webhook_verification_token,
            target_database_id=settings.target_database_id,
            target_data_source_id=settings.target_data_source_id,
            seed_property=settings.seed_property,
            title_property=settings.title_property,
        )

        logger.info(
            "Sprint namer service created",
            generator_version=generator.version,
            max_pending=dispatcher.max_pending,
            verifies_signatures=ingress.verifies_signatures,
            filters_targets=ingress.filters_targets,
        )

        return cls(
            settings=settings,
            generator=generator,
            dispatcher=dispatcher,
            client=client,
            pipeline=pipeline,
            ingress=ingress,
        )

    async def close(self) -> None:
        """Drain background jobs and release the Notion client."""
        await self.dispatcher.shutdown(timeout=self.settings.shutdown_timeout_seconds)
        aclose = getattr(self.client, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> SprintNamerService:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
