"""Tests for CORS headers, preflight handling and error envelopes."""

from fastapi import status
from fastapi.testclient import TestClient

from spunk_analytics.schemas.tournament import TournamentConfig
from spunk_analytics.services.tournament import TournamentEngine
from spunk_analytics.store.memory import InMemoryKVStore

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


def _assert_cors(response) -> None:
    for name, value in CORS_HEADERS.items():
        assert response.headers[name] == value


def test_json_responses_carry_cors_headers(client: TestClient) -> None:
    r = client.get("/stats")
    assert r.status_code == status.HTTP_200_OK
    assert r.headers["content-type"].startswith("application/json")
    _assert_cors(r)


def test_preflight_returns_empty_body(client: TestClient) -> None:
    r = client.options("/track")
    assert r.status_code == status.HTTP_200_OK
    assert r.content == b""
    _assert_cors(r)

    r = client.options("/anything/at/all")
    assert r.status_code == status.HTTP_200_OK
    _assert_cors(r)


def test_unknown_route_is_not_found(client: TestClient) -> None:
    r = client.get("/nope")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json() == {"error": "Not found"}
    _assert_cors(r)


def test_wrong_method_is_not_found(client: TestClient) -> None:
    r = client.get("/track")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json() == {"error": "Not found"}


def test_unhandled_error_is_generic(
    client: TestClient, store: InMemoryKVStore, mocker
) -> None:
    mocker.patch.object(store, "put", side_effect=RuntimeError("store exploded"))

    r = client.post("/tournament/action", json={"wallet": "bc1qboom", "action": "share"})

    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert r.json() == {"error": "Internal error"}
    assert "exploded" not in r.text
    _assert_cors(r)


def test_non_scalar_body_fields_are_rejected(client: TestClient) -> None:
    r = client.post("/tournament/action", json={"wallet": ["not", "a", "string"], "action": 1})
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json() == {"error": "Invalid request"}
    _assert_cors(r)


def test_internal_model_errors_are_not_client_errors(client: TestClient, mocker) -> None:
    def _broken_config(*args, **kwargs):
        return TournamentConfig.model_validate({"id": "broken"})

    mocker.patch.object(TournamentEngine, "record_action", side_effect=_broken_config)

    r = client.post("/tournament/action", json={"wallet": "bc1qboom", "action": "share"})

    assert r.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert r.json() == {"error": "Internal error"}
