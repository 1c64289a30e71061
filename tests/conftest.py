# tests/conftest.py
from __future__ import annotations

import os
import time
from collections.abc import Callable, Iterator
from datetime import datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("KV_BACKEND", "memory")

from spunk_analytics.core.settings import Settings, get_settings, settings
from spunk_analytics.main import app as fastapi_app
from spunk_analytics.schemas.tournament import TournamentConfig
from spunk_analytics.services.counters import CounterAggregator
from spunk_analytics.services.tournament import TournamentEngine
from spunk_analytics.store.memory import InMemoryKVStore
from spunk_analytics.store.session import get_store
from tests.helpers import FIXED_NOW

DAY_SECONDS = 86_400


class ManualClock:
    """Monotonic clock for the in-memory store that tests advance by hand."""

    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def store_clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def store(store_clock: ManualClock) -> InMemoryKVStore:
    return InMemoryKVStore(clock=store_clock)


@pytest.fixture()
def test_settings() -> Settings:
    """Settings with a tournament that is still running."""
    return settings.model_copy(
        update={"tournament_end_time": int(time.time()) + 7 * DAY_SECONDS}
    )


@pytest.fixture()
def ended_settings() -> Settings:
    """Settings with a tournament that finished an hour ago."""
    return settings.model_copy(update={"tournament_end_time": int(time.time()) - 3_600})


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI, store: InMemoryKVStore, test_settings: Settings
) -> Iterator[None]:
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_store, None)
        app.dependency_overrides.pop(get_settings, None)


@pytest.fixture()
def use_settings(app: FastAPI) -> Callable[[Settings], None]:
    """Swap the settings served to the app for the rest of the test."""

    def _use(new_settings: Settings) -> None:
        app.dependency_overrides[get_settings] = lambda: new_settings

    return _use


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def aggregator(store: InMemoryKVStore) -> CounterAggregator:
    return CounterAggregator(store, counter_ttl_seconds=365 * DAY_SECONDS)


@pytest.fixture()
def tournament_config() -> TournamentConfig:
    return TournamentConfig(
        id="test-cup",
        name="Test Cup",
        end_time=int(FIXED_NOW.timestamp()) + DAY_SECONDS,
        points={"referral": 50, "share": 10, "game_win": 3, "faucet_claim": 1},
        prize={"type": "ordinal"},
    )


@pytest.fixture()
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture()
def engine(
    store: InMemoryKVStore,
    aggregator: CounterAggregator,
    tournament_config: TournamentConfig,
    clock: Callable[[], datetime],
) -> TournamentEngine:
    return TournamentEngine(
        store,
        aggregator,
        tournament_config,
        ttl_seconds=30 * DAY_SECONDS,
        clock=clock,
    )
