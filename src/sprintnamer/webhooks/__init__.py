"""Inbound Notion webhook handling.

Example:
    ```python
    from sprintnamer.webhooks import WebhookIngress, sign

    outcome = ingress.handle(raw_body, signature=request.headers.get("x-notion-signature"))
    ```
"""

from .ingress import WebhookIngress
from .models import PAGE_CREATED, EventParent, WebhookEvent, WebhookOutcome
from .signature import SIGNATURE_PREFIX, sign, verify

__all__ = [
    "PAGE_CREATED",
    "SIGNATURE_PREFIX",
    "EventParent",
    "WebhookEvent",
    "WebhookIngress",
    "WebhookOutcome",
    "sign",
    "verify",
]
