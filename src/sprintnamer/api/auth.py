"""Shared-token authentication for the naming endpoints.

Notion automations send a static token in ``X-Notion-Automations-Token``.
It is compared in constant time after stripping surrounding whitespace.
"""

from __future__ import annotations

import hmac
from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader

from sprintnamer.exceptions import AuthenticationError
from sprintnamer.logging import get_logger

from .dependencies import ServiceDep

logger = get_logger(__name__)

AUTOMATIONS_TOKEN_HEADER = "X-Notion-Automations-Token"

# Security scheme for OpenAPI docs
automations_token_scheme = APIKeyHeader(name=AUTOMATIONS_TOKEN_HEADER, auto_error=False)


def check_automations_token(expected: str | None, provided: str | None) -> None:
    """Validate a provided automations token against the configured one.

    Args:
        expected: Configured token.
        provided: Header value from the request.

    Raises:
        AuthenticationError: If the token is missing or does not match.
    """
    if provided is None or not provided.strip():
        raise AuthenticationError(f"Missing {AUTOMATIONS_TOKEN_HEADER} header")

    if expected is None or not expected.strip():
        raise AuthenticationError(f"Invalid {AUTOMATIONS_TOKEN_HEADER}")

    if not hmac.compare_digest(
        provided.strip().encode("utf-8"),
        expected.strip().encode("utf-8"),
    ):
        raise AuthenticationError(f"Invalid {AUTOMATIONS_TOKEN_HEADER}")


async def require_automations_token(
    service: ServiceDep,
    token: Annotated[str | None, Depends(automations_token_scheme)],
) -> None:
    """FastAPI dependency enforcing the automations token when API auth is on.

    Usage:
        @router.post("/sprint-name", dependencies=[Depends(require_automations_token)])
        async def sprint_name(...):
            ...
    """
    if not service.settings.is_api_auth_enabled:
        return

    check_automations_token(service.settings.automations_token, token)
    logger.debug("Automations token accepted")
