"""Shared API dependencies wiring settings, the store and the services."""

from typing import Annotated, Any

from fastapi import Depends, Request

from spunk_analytics.core.settings import Settings, get_settings
from spunk_analytics.services.counters import CounterAggregator
from spunk_analytics.services.ingestion import EventIngestionService, RequestContext
from spunk_analytics.services.stats import StatsReader
from spunk_analytics.services.tournament import TournamentEngine
from spunk_analytics.store.base import KVStore
from spunk_analytics.store.session import get_store

SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreDep = Annotated[KVStore, Depends(get_store)]


async def get_json_body(request: Request) -> dict[str, Any]:
    """Return the request body as a JSON object.

    Bodies that are empty, not JSON, or not an object are treated as ``{}``
    so that handlers report the missing fields instead of a parse failure.
    """
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def get_request_context(request: Request, settings: SettingsDep) -> RequestContext:
    """Extract the caller's address, country and user agent.

    Args:
        request: Incoming HTTP request
        settings: Settings naming the proxy-supplied headers

    Returns:
        Request metadata used for visitor fingerprinting and bucketing
    """
    address = request.headers.get(settings.client_ip_header)
    if not address and request.client is not None:
        address = request.client.host
    return RequestContext(
        address=address or "unknown",
        country=request.headers.get(settings.country_header) or "??",
        user_agent=request.headers.get("User-Agent") or "",
        mobile_tokens=tuple(settings.mobile_ua_tokens),
    )


def get_aggregator(store: StoreDep, settings: SettingsDep) -> CounterAggregator:
    """Return a counter aggregator bound to the configured store."""
    return CounterAggregator(store, counter_ttl_seconds=settings.counter_ttl_seconds)


AggregatorDep = Annotated[CounterAggregator, Depends(get_aggregator)]


def get_ingestion_service(aggregator: AggregatorDep, settings: SettingsDep) -> EventIngestionService:
    """Return the event ingestion service."""
    return EventIngestionService(
        aggregator,
        visitor_set_ttl_seconds=settings.visitor_set_ttl_seconds,
    )


def get_stats_reader(aggregator: AggregatorDep, settings: SettingsDep) -> StatsReader:
    """Return the stats reader."""
    return StatsReader(aggregator, known_games=settings.known_games)


def get_tournament_engine(
    store: StoreDep,
    aggregator: AggregatorDep,
    settings: SettingsDep,
) -> TournamentEngine:
    """Return the engine for the configured tournament."""
    return TournamentEngine(
        store,
        aggregator,
        settings.tournament,
        ttl_seconds=settings.tournament_ttl_seconds,
    )


JsonBodyDep = Annotated[dict[str, Any], Depends(get_json_body)]
RequestContextDep = Annotated[RequestContext, Depends(get_request_context)]
IngestionDep = Annotated[EventIngestionService, Depends(get_ingestion_service)]
StatsReaderDep = Annotated[StatsReader, Depends(get_stats_reader)]
TournamentDep = Annotated[TournamentEngine, Depends(get_tournament_engine)]
