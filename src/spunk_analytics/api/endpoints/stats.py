"""Aggregate statistics endpoints."""

from typing import Any

from fastapi import APIRouter

from spunk_analytics.api.dependencies import StatsReaderDep

router = APIRouter(prefix="/stats", tags=["analytics"])


@router.get("")
async def get_public_stats(reader: StatsReaderDep) -> dict[str, Any]:
    """Return today, this week and all-time aggregate counts."""
    return await reader.public_snapshot()


@router.get("/admin")
async def get_admin_stats(reader: StatsReaderDep) -> dict[str, Any]:
    """Return the trailing 7-day series with game, country, device and hourly breakdowns."""
    return await reader.admin_snapshot()
