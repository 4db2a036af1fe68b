"""API tests against an app wired to a pinned clock and no directions provider."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from wildlife_alert.api import create_app

DETECTION = {
    "id": "a1",
    "species": "lion",
    "timestamp": "2026-03-01T21:00:00Z",
    "location": {"latitude": -3.434886, "longitude": 37.783987, "address": "Mtakuja East"},
    "distance_to_settlement_meters": 80,
    "confidence_percent": 95,
}


@pytest.fixture
def api_client(manager):
    with TestClient(create_app(manager)) as client:
        yield client


def _create(client, **overrides):
    detection = {**DETECTION, **overrides}
    return client.post("/alerts", json={"detection": detection, "direction": "W"})


def test_health(api_client):
    assert api_client.get("/health").json() == {"status": "ok"}


def test_create_alert(api_client):
    resp = _create(api_client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["species"] == "LION"
    assert body["risk_level"] == "CRITICAL"
    assert body["status"] == "PENDING"
    assert len(body["predicted_trajectory"]) == 4


def test_duplicate_create_conflicts(api_client):
    _create(api_client)
    assert _create(api_client).status_code == 409


def test_invalid_payload_rejected(api_client):
    resp = api_client.post("/alerts", json={"detection": {"id": "x"}})
    assert resp.status_code == 422


def test_dispatch_and_resolve(api_client, clock):
    _create(api_client)
    clock.advance(25)

    resp = api_client.post("/alerts/a1/dispatch")
    assert resp.status_code == 200
    assert resp.json()["status"] == "DISPATCHED"
    assert resp.json()["response_time_seconds"] == 25

    again = api_client.post("/alerts/a1/dispatch")
    assert again.status_code == 409
    assert again.json()["current"] == "DISPATCHED"

    assert api_client.post("/alerts/a1/resolve").json()["status"] == "RESOLVED"
    assert api_client.post("/alerts/a1/dispatch").status_code == 409


def test_unknown_alert_is_404(api_client):
    assert api_client.get("/alerts/nope").status_code == 404
    assert api_client.post("/alerts/nope/resolve").status_code == 404


def test_list_active(api_client):
    _create(api_client, id="a1")
    _create(api_client, id="a2")
    api_client.post("/alerts/a2/resolve")

    assert len(api_client.get("/alerts").json()) == 2
    active = api_client.get("/alerts", params={"active": True}).json()
    assert [a["id"] for a in active] == ["a1"]


def test_route_is_straight_line_estimate(api_client):
    _create(api_client)
    resp = api_client.get("/alerts/a1/route")
    assert resp.status_code == 200
    body = resp.json()
    assert body["degraded"] is True
    assert len(body["path"]) == 2
    assert body["origin_station_id"] in {"s1", "s2"}


def test_route_without_stations_is_503(manager):
    manager.router.stations = []
    with TestClient(create_app(manager)) as client:
        _create(client)
        assert client.get("/alerts/a1/route").status_code == 503


def test_stats_and_notifications(api_client, clock):
    _create(api_client)
    clock.advance(10)
    api_client.post("/alerts/a1/dispatch")

    stats = api_client.get("/stats").json()
    assert stats["total"] == 1
    assert stats["dispatched"] == 1
    assert stats["sla_compliance_rate"] == 1.0

    notes = api_client.get("/notifications").json()
    assert [n["kind"] for n in notes] == ["DISPATCH", "ALERT"]

    assert api_client.post(f"/notifications/{notes[0]['id']}/read").json()["read"] is True
    assert api_client.post("/notifications/missing/read").status_code == 404


def test_timestamp_without_offset_can_be_dispatched(api_client, clock):
    assert _create(api_client, timestamp="2026-03-01T21:00:00").status_code == 201
    clock.advance(12)

    resp = api_client.post("/alerts/a1/dispatch")
    assert resp.status_code == 200
    assert resp.json()["response_time_seconds"] == 12
