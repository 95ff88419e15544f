"""Inbound Notion webhook handling.

Each delivery moves through:

    RECEIVED -> VERIFICATION_HANDSHAKE | AUTHENTICATED | REJECTED -> ACK | NO-OP

1. A JSON object carrying ``verification_token`` is the one-time subscription
   handshake: the token is logged for the operator and acknowledged without a
   signature check.
2. Otherwise, if a verification secret is configured, the
   ``X-Notion-Signature`` header must match the raw body; a mismatch raises
   AuthenticationError and nothing is scheduled.
3. Only ``page.created`` events for a page in the configured target database
   or data source qualify. Everything else is acknowledged as a no-op.
4. Qualifying pages get a background job that fetches the page, picks a seed
   and runs the update pipeline. The delivery is acknowledged right after
   submission, even if the dispatcher is full: Notion retries deliveries on
   its own, and upstream failures are only logged.
"""

from __future__ import annotations

import json
from datetime import datetime
from functools import partial

from sprintnamer.exceptions import AuthenticationError
from sprintnamer.jobs import JobDispatcher
from sprintnamer.logging import get_logger
from sprintnamer.naming import is_strict_seed, seed_from_timestamp
from sprintnamer.notion import PageSnapshot, RemoteDocumentClient
from sprintnamer.pipeline import UpdatePipeline, UpdateResult

from .models import WebhookEvent, WebhookOutcome
from .signature import verify

logger = get_logger(__name__)


def _normalize_id(value: str | None) -> str | None:
    """Notion ids appear both dashed and undashed; compare them without dashes."""
    if not value:
        return None
    normalized = value.strip().replace("-", "").lower()
    return normalized or None


def _parse_body(raw_body: bytes) -> object:
    try:
        return json.loads(raw_body)
    except (ValueError, UnicodeDecodeError):
        return None


class WebhookIngress:
    """Authenticates, classifies and schedules work for Notion webhook deliveries."""

    def __init__(
        self,
        dispatcher: JobDispatcher,
        pipeline: UpdatePipeline,
        client: RemoteDocumentClient,
        verification_secret: str | None = None,
        target_database_id: str | None = None,
        target_data_source_id: str | None = None,
        seed_property: str | None = None,
        title_property: str | None = None,
    ) -> None:
        """Initialize the ingress.

        Args:
            dispatcher: Dispatcher that runs page updates in the background.
            pipeline: Update pipeline applied to qualifying pages.
            client: Notion client used to fetch page snapshots.
            verification_secret: Token used to verify signatures. None accepts
                unsigned deliveries.
            target_database_id: Only pages under this database qualify.
            target_data_source_id: Only pages under this data source qualify.
            seed_property: Property holding the ``YYYY_WNN`` seed.
            title_property: Property to fall back to for the seed. Defaults to
                the page's title property.
        """
        self._dispatcher = dispatcher
        self._pipeline = pipeline
        self._client = client
        self._secret = verification_secret or None
        self._target_database_id = _normalize_id(target_database_id)
        self._target_data_source_id = _normalize_id(target_data_source_id)
        self._seed_property = seed_property or None
        self._title_property = title_property or None

    @property
    def verifies_signatures(self) -> bool:
        return self._secret is not None

    @property
    def filters_targets(self) -> bool:
        return self._target_database_id is not None or self._target_data_source_id is not None

    def handle(self, raw_body: bytes, signature: str | None = None) -> WebhookOutcome:
        """Process one delivery. Never waits for the scheduled job.

        Args:
            raw_body: Request body exactly as received.
            signature: Value of the ``X-Notion-Signature`` header.

        Returns:
            WebhookOutcome describing what was done.

        Raises:
            AuthenticationError: If signature verification is enabled and fails.
        """
        payload = _parse_body(raw_body)

        if isinstance(payload, dict) and isinstance(payload.get("verification_token"), str):
            logger.info(
                "Notion webhook verification token received",
                verification_token=payload["verification_token"],
            )
            return WebhookOutcome(status="handshake")

        if self._secret is not None and not verify(self._secret, raw_body, signature):
            logger.warning(
                "Notion webhook signature mismatch",
                has_signature=isinstance(signature, str) and signature.strip() != "",
            )
            raise AuthenticationError("Invalid Notion webhook signature")

        event = WebhookEvent.from_payload(
            payload,
            raw_body=raw_body.decode("utf-8", errors="replace"),
            signature=signature,
        )
        logger.info(
            "Notion webhook event received",
            type=event.type,
            entity_id=event.entity_id,
            event_id=event.event_id,
        )

        if not event.is_page_created:
            return WebhookOutcome(
                status="ignored", event_type=event.type, entity_id=event.entity_id
            )

        if not self.matches_target(event):
            logger.info(
                "Page is outside the target collection, skipping",
                entity_id=event.entity_id,
                parent_id=event.parent.id if event.parent else None,
            )
            return WebhookOutcome(
                status="filtered", event_type=event.type, entity_id=event.entity_id
            )

        result = self._dispatcher.submit(
            partial(self._process_created_page, event),
            on_error=partial(self._log_job_failure, event),
        )
        if not result.accepted:
            logger.warning(
                "Dispatcher full, dropping webhook job",
                entity_id=event.entity_id,
                event_id=event.event_id,
                pending=result.pending,
                max_pending=result.max_pending,
            )
            return WebhookOutcome(
                status="queue_full", event_type=event.type, entity_id=event.entity_id
            )

        return WebhookOutcome(status="scheduled", event_type=event.type, entity_id=event.entity_id)

    def matches_target(self, event: WebhookEvent) -> bool:
        """True if the event's parent is the configured target.

        With no target configured, every page matches.
        """
        if not self.filters_targets:
            return True
        parent = event.parent
        if parent is None:
            return False
        if self._target_database_id is not None and (
            _normalize_id(parent.id) == self._target_database_id
        ):
            return True
        if self._target_data_source_id is not None and (
            _normalize_id(parent.data_source_id) == self._target_data_source_id
        ):
            return True
        return False

    def resolve_seed(
        self,
        snapshot: PageSnapshot,
        timestamp: str | None,
        now: datetime | None = None,
    ) -> str:
        """Pick the seed for a page.

        Uses the seed property, then the title property, when either holds a
        ``YYYY_WNN`` token; otherwise the ISO week of the event timestamp (or
        of ``now``).
        """
        if self._title_property:
            title = snapshot.plain_text(self._title_property)
        else:
            title = snapshot.title_text()

        for candidate in (snapshot.plain_text(self._seed_property), title):
            if is_strict_seed(candidate):
                return candidate.strip()  # type: ignore[union-attr]

        return seed_from_timestamp(timestamp, now=now)

    async def _process_created_page(self, event: WebhookEvent) -> UpdateResult:
        page_id = event.entity_id or ""
        snapshot = await self._client.get_page(page_id)
        seed = self.resolve_seed(snapshot, event.timestamp)
        result = await self._pipeline.apply(page_id=page_id, seed=seed, existing_snapshot=snapshot)
        logger.info(
            "Webhook job finished",
            page_id=page_id,
            event_id=event.event_id,
            seed=seed,
            skipped=result.skipped,
            reason=result.reason,
        )
        return result

    def _log_job_failure(self, event: WebhookEvent, error: BaseException) -> None:
        logger.error(
            "Webhook job failed",
            page_id=event.entity_id,
            event_id=event.event_id,
            error=str(error),
            status=getattr(error, "status", None),
            body=getattr(error, "body", None),
        )
