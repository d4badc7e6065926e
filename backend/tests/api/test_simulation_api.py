"""Tests for the system and simulation API endpoints."""

from __future__ import annotations

import logging

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


def _radial_payload(line_capacity: float = 500.0) -> dict:
    return {
        "buses": [
            {"id": 1, "name": "Gen", "bus_type": "Slack", "base_load": 0},
            {"id": 2, "name": "Load", "bus_type": "PQ", "base_load": 100},
            {"id": 3, "name": "Tail", "bus_type": "PQ", "base_load": 0},
        ],
        "generators": [
            {"id": "G1", "bus_id": 1, "p_min": 0, "p_max": 1000, "cost_b": 10},
        ],
        "lines": [
            {"id": "L1-2", "from_bus": 1, "to_bus": 2, "reactance": 0.1,
             "capacity": line_capacity},
            {"id": "L2-3", "from_bus": 2, "to_bus": 3, "reactance": 0.1, "capacity": 500},
        ],
        "load_profile": [1.0] * 24,
    }


class TestHealth:
    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_request_id_header(self, client: AsyncClient):
        resp = await client.get("/health", headers={"X-Request-ID": "abc123"})
        assert resp.headers["X-Request-ID"] == "abc123"

    async def test_health_has_no_access_line(self, client: AsyncClient, caplog):
        with caplog.at_level(logging.INFO, logger="scuc.access"):
            await client.get("/health")
            await client.get("/api/v1/systems/default")
        paths = [r.path for r in caplog.records if r.name == "scuc.access"]
        assert paths == ["/api/v1/systems/default"]


class TestDefaultSystem:
    async def test_get_default_system(self, default_system_payload: dict):
        assert len(default_system_payload["buses"]) == 5
        assert len(default_system_payload["generators"]) == 3
        assert len(default_system_payload["lines"]) == 7
        assert len(default_system_payload["load_profile"]) == 24
        assert default_system_payload["buses"][0]["bus_type"] == "Slack"

    async def test_simulate_default(self, client: AsyncClient):
        resp = await client.post("/api/v1/simulations/default")
        assert resp.status_code == 200
        data = resp.json()
        assert [h["hour"] for h in data["hours"]] == list(range(24))
        assert data["summary"]["peak_hour"] == 17

    async def test_round_trip_edited_default(self, client: AsyncClient, default_system_payload):
        default_system_payload["load_profile"][8] = 0.5
        resp = await client.post("/api/v1/simulations", json=default_system_payload)
        assert resp.status_code == 200
        hour8 = resp.json()["hours"][8]
        assert hour8["total_load"] == pytest.approx(400.0)
        assert hour8["gen_status"] == {"G1": True, "G2": False, "G3": False}


class TestSimulate:
    async def test_radial_system(self, client: AsyncClient):
        resp = await client.post("/api/v1/simulations", json=_radial_payload())
        assert resp.status_code == 200
        hour0 = resp.json()["hours"][0]
        assert hour0["gen_output"]["G1"] == pytest.approx(100.0)
        assert hour0["line_flows"]["L1-2"] == pytest.approx(100.0)
        assert hour0["alerts"] == []
        assert hour0["lmp"] == {"1": 10.0, "2": 10.0, "3": 10.0}
        assert hour0["angle_solution_status"] == "solved"

    async def test_overload_alert(self, client: AsyncClient):
        resp = await client.post("/api/v1/simulations", json=_radial_payload(line_capacity=80))
        assert resp.status_code == 200
        body = resp.json()
        assert body["hours"][0]["alerts"] == ["Line 1-2 overloaded: 125.0%"]
        assert body["summary"]["congested_hours"] == 24

    async def test_wrong_profile_length(self, client: AsyncClient):
        payload = _radial_payload()
        payload["load_profile"] = [1.0] * 23
        resp = await client.post("/api/v1/simulations", json=payload)
        assert resp.status_code == 422

    async def test_non_positive_reactance_rejected(self, client: AsyncClient):
        payload = _radial_payload()
        payload["lines"][0]["reactance"] = 0
        resp = await client.post("/api/v1/simulations", json=payload)
        assert resp.status_code == 422

    async def test_dangling_bus_reference(self, client: AsyncClient):
        payload = _radial_payload()
        payload["lines"][1]["to_bus"] = 9
        resp = await client.post("/api/v1/simulations", json=payload)
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert any("unknown bus 9" in issue for issue in detail)
