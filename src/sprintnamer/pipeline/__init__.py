"""Idempotent page update pipeline."""

from .update import (
    PropertyMapping,
    UpdateIntent,
    UpdatePipeline,
    UpdateResult,
    compose_label,
)

__all__ = [
    "PropertyMapping",
    "UpdateIntent",
    "UpdatePipeline",
    "UpdateResult",
    "compose_label",
]
