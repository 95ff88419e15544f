"""FastAPI routers for the sprint namer endpoints."""

from __future__ import annotations

from functools import partial

from fastapi import APIRouter, Depends, Request, status

from sprintnamer import __version__
from sprintnamer.exceptions import CapacityExceededError
from sprintnamer.logging import get_logger

from .auth import require_automations_token
from .dependencies import ServiceDep, get_optional_service
from .helpers import extract_page_id, extract_seed, get_request_id, read_json_body
from .schemas import AsyncAcceptedResponse, HealthResponse, SprintNameResponse, WebhookAck

logger = get_logger(__name__)

router = APIRouter()
system_router = APIRouter()

SIGNATURE_HEADER = "x-notion-signature"


@system_router.get("/health", response_model=HealthResponse, tags=["system"])
async def health_check(request: Request) -> HealthResponse:
    """Check service health and dispatcher load."""
    service = get_optional_service(request)
    if service is None:
        return HealthResponse(status="unhealthy", version=__version__)

    return HealthResponse(
        status="healthy",
        version=__version__,
        generator_version=service.generator.version,
        pending=service.dispatcher.pending,
        max_pending=service.dispatcher.max_pending,
    )


@router.post(
    "/sprint-name",
    response_model=SprintNameResponse,
    tags=["naming"],
    dependencies=[Depends(require_automations_token)],
)
async def sprint_name(request: Request, service: ServiceDep) -> SprintNameResponse:
    """Generate a sprint name for a seed and return it immediately.

    The seed comes from the ``X-Notion-Sprint-Seed`` header or the JSON
    body's ``seed`` field.
    """
    body = await read_json_body(request)
    seed = extract_seed(request.headers, body, strict=service.settings.seed_format == "strict")
    generated = service.generator.generate(seed)

    return SprintNameResponse(
        request_id=get_request_id(request),
        name=generated.name,
        slug=generated.slug,
        generator_version=generated.generator_version,
    )


@router.post(
    "/sprint-name/async",
    response_model=AsyncAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    tags=["naming"],
    dependencies=[Depends(require_automations_token)],
)
async def sprint_name_async(request: Request, service: ServiceDep) -> AsyncAcceptedResponse:
    """Queue a sprint name update for a page and return without waiting.

    Responds 429 when the dispatcher is saturated; the caller should retry later.
    """
    request_id = get_request_id(request)
    body = await read_json_body(request)
    seed = extract_seed(request.headers, body, strict=service.settings.seed_format == "strict")
    page_id = extract_page_id(request.headers, body)

    result = service.dispatcher.submit(
        partial(service.pipeline.apply, page_id=page_id, seed=seed),
        on_error=partial(_log_async_failure, request_id, page_id),
    )
    if not result.accepted:
        raise CapacityExceededError(pending=result.pending, max_pending=result.max_pending)

    logger.info("Sprint name job queued", page_id=page_id, pending=result.pending)
    return AsyncAcceptedResponse(request_id=request_id)


@router.post("/webhook", response_model=WebhookAck, tags=["webhooks"])
async def notion_webhook(request: Request, service: ServiceDep) -> WebhookAck:
    """Receive Notion webhook deliveries.

    Returns ``{ok: true}`` for the verification handshake and for every
    authenticated event, and 401 when signature verification fails.
    """
    raw_body = await request.body()
    outcome = service.ingress.handle(raw_body, signature=request.headers.get(SIGNATURE_HEADER))
    logger.debug("Webhook handled", status=outcome.status, event_type=outcome.event_type)
    return WebhookAck()


def _log_async_failure(request_id: str, page_id: str, error: BaseException) -> None:
    logger.error(
        "Sprint name job failed",
        request_id=request_id,
        page_id=page_id,
        error=str(error),
        status=getattr(error, "status", None),
    )
