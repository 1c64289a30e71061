"""End-to-end tests for event tracking and public stats."""

from fastapi import status
from fastapi.testclient import TestClient

from spunk_analytics.store.memory import InMemoryKVStore
from spunk_analytics.utils.time import day_bucket, utcnow


def test_missing_event_rejected(client: TestClient, store: InMemoryKVStore) -> None:
    r = client.post("/track", json={"page": "dice"})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json() == {"error": "Missing event"}
    assert store.snapshot() == {}


def test_non_json_body_is_missing_event(client: TestClient) -> None:
    r = client.post("/track", content=b"not json", headers={"Content-Type": "text/plain"})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json() == {"error": "Missing event"}


def test_unknown_event_is_noop(client: TestClient, store: InMemoryKVStore) -> None:
    r = client.post("/track", json={"event": "sound_toggle", "on": False})
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"ok": True}
    assert store.snapshot() == {}


def test_first_visit_shows_in_stats(client: TestClient) -> None:
    r = client.post(
        "/track",
        json={"event": "visit", "page": "home"},
        headers={"CF-Connecting-IP": "203.0.113.50", "CF-IPCountry": "CA"},
    )
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"ok": True, "new_visitor": True}

    stats = client.get("/stats").json()
    assert stats["today"]["unique_visitors"] == 1
    assert stats["today"]["page_views"] == 1
    assert stats["week"]["unique_visitors"] == 1
    assert stats["all_time"]["total_page_views"] == 1


def test_repeat_visit_same_address(client: TestClient) -> None:
    headers = {"CF-Connecting-IP": "203.0.113.51"}
    client.post("/track", json={"event": "visit"}, headers=headers)
    r = client.post("/track", json={"event": "visit"}, headers=headers)
    assert r.json() == {"ok": True, "new_visitor": False}

    stats = client.get("/stats").json()
    assert stats["today"]["unique_visitors"] == 1
    assert stats["today"]["page_views"] == 2


def test_request_metadata_buckets(client: TestClient, store: InMemoryKVStore) -> None:
    client.post(
        "/track",
        json={"event": "visit"},
        headers={
            "CF-Connecting-IP": "203.0.113.52",
            "CF-IPCountry": "JP",
            "User-Agent": "Mozilla/5.0 (Linux; Android 14; Pixel 8) Mobile",
        },
    )
    today = day_bucket(utcnow())
    values = store.snapshot()
    assert values[f"country:{today}:JP"] == "1"
    assert values[f"device:{today}:mobile"] == "1"


def test_game_play_feeds_stats(client: TestClient) -> None:
    client.post("/track", json={"event": "game_play", "game": "dice", "bet": 100, "result": "win"})
    client.post("/track", json={"event": "game_play", "game": "plinko", "bet": 20})
    client.post("/track", json={"event": "faucet_claim"})

    stats = client.get("/stats").json()
    assert stats["today"]["games_played"] == 2
    assert stats["today"]["wager_volume"] == 120
    assert stats["today"]["faucet_claims"] == 1
    assert stats["all_time"]["total_wagered"] == 120

    admin = client.get("/stats/admin").json()
    assert admin["games"]["dice"]["today"] == 1
    assert admin["games"]["plinko"]["total"] == 1
    assert len(admin["daily"]) == 7
    assert admin["daily"][0]["games_played"] == 2
    assert len(admin["hourly"]) == 24
