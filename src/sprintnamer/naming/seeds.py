"""Seed format helpers.

Sprint seeds on the webhook path are ISO-week tokens such as ``2026_W04``.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

SEED_PATTERN = re.compile(r"^\d{4}_W\d{2}$")


def is_strict_seed(value: object) -> bool:
    """Return True if ``value`` is a ``YYYY_WNN`` token (surrounding whitespace ignored)."""
    return isinstance(value, str) and SEED_PATTERN.match(value.strip()) is not None


def iso_week_seed(moment: datetime) -> str:
    """Build a ``YYYY_WNN`` seed for the ISO-8601 week containing ``moment``.

    Weeks start on Monday and the week-numbering year is the one holding the
    week's Thursday, so 2021-01-03 is ``2020_W53`` and 2024-12-30 is ``2025_W01``.
    Aware datetimes are converted to UTC first; naive ones are taken as UTC.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    year, week, _ = moment.isocalendar()
    return f"{year:04d}_W{week:02d}"


def seed_from_timestamp(timestamp: str | None, now: datetime | None = None) -> str:
    """Derive a fallback seed from an ISO-8601 event timestamp.

    Falls back to ``now`` (or the current UTC time) when the timestamp is
    missing or unparseable.
    """
    if timestamp:
        try:
            return iso_week_seed(datetime.fromisoformat(timestamp.strip()))
        except ValueError:
            pass
    return iso_week_seed(now or datetime.now(UTC))
