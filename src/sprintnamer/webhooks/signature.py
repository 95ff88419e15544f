"""HMAC-SHA256 signatures for Notion webhook deliveries.

Notion signs each delivery with the subscription's verification token and
sends the result in the ``X-Notion-Signature`` header as ``sha256=<hex>``.
"""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_PREFIX = "sha256="


def _as_bytes(payload: str | bytes) -> bytes:
    return payload.encode("utf-8") if isinstance(payload, str) else payload


def sign(secret: str, payload: str | bytes) -> str:
    """Compute the HMAC-SHA256 signature for a webhook payload.

    Args:
        secret: Shared verification token.
        payload: Raw request body.

    Returns:
        Signature in format "sha256=<hex_digest>".
    """
    digest = hmac.new(
        key=secret.encode("utf-8"),
        msg=_as_bytes(payload),
        digestmod=hashlib.sha256,
    ).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify(secret: str | None, payload: object, provided_signature: object) -> bool:
    """Verify a webhook signature in constant time.

    Never raises: a missing secret, a payload that is not ``str``/``bytes``
    or a missing signature all verify as False.

    Args:
        secret: Shared verification token.
        payload: Raw request body that was signed.
        provided_signature: Value of the signature header.

    Returns:
        True if the signature matches.
    """
    if not isinstance(secret, str) or not secret:
        return False
    if not isinstance(payload, (str, bytes)):
        return False
    if not isinstance(provided_signature, str) or not provided_signature:
        return False

    expected = sign(secret, payload).encode("utf-8")
    try:
        provided = provided_signature.encode("utf-8")
    except UnicodeEncodeError:
        return False
    if len(expected) != len(provided):
        return False
    return hmac.compare_digest(expected, provided)
