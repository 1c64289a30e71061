"""Telemetry ingestion endpoint."""

from fastapi import APIRouter

from spunk_analytics.api.dependencies import IngestionDep, JsonBodyDep, RequestContextDep
from spunk_analytics.schemas.events import parse_event

router = APIRouter(tags=["analytics"])


@router.post("/track")
async def track_event(
    body: JsonBodyDep,
    context: RequestContextDep,
    ingestion: IngestionDep,
) -> dict[str, bool]:
    """Record a front-end telemetry event.

    Args:
        body: JSON payload with an ``event`` name and type-specific fields
        context: Caller metadata used for visitor fingerprinting
        ingestion: Event ingestion service

    Returns:
        ``{"ok": true}``, plus ``new_visitor`` for visit events
    """
    event = parse_event(body)
    result = await ingestion.ingest(event, context)
    return result.model_dump(exclude_none=True)
