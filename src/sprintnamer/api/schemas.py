"""Pydantic schemas for API responses."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SprintNameResponse(BaseModel):
    """Response body of the synchronous naming endpoint.

    Attributes:
        request_id: Correlation id of this request.
        name: ``"Sprint " + slug``.
        slug: Generated adjective-noun slug.
        generator_version: Generator version that produced the name.
    """

    model_config = ConfigDict(extra="forbid")

    request_id: str
    name: str
    slug: str
    generator_version: str


class AsyncAcceptedResponse(BaseModel):
    """Response body when an asynchronous naming job was accepted."""

    model_config = ConfigDict(extra="forbid")

    request_id: str
    accepted: bool = True


class WebhookAck(BaseModel):
    """Acknowledgement returned for every authenticated webhook delivery."""

    model_config = ConfigDict(extra="forbid")

    ok: bool = True


class HealthResponse(BaseModel):
    """Health check response.

    Attributes:
        status: ``healthy`` once the service is initialized.
        version: Application version.
        generator_version: Name generator version, when initialized.
        pending: Background jobs in flight.
        max_pending: Dispatcher capacity.
    """

    model_config = ConfigDict(extra="forbid")

    status: Literal["healthy", "unhealthy"]
    version: str
    generator_version: str | None = None
    pending: int = Field(default=0, ge=0)
    max_pending: int = Field(default=0, ge=0)
