"""Tests for the uptime formatter and the health endpoints."""

import pytest

from app.services.health_service import format_uptime


@pytest.mark.parametrize(
    "seconds,expected",
    [
        (0, ""),
        (0.9, ""),
        (59, "59s"),
        (60, "1m"),
        (3600, "1h"),
        (3661, "1h 1m 1s"),
        (86400, "1d"),
        (90061, "1d 1h 1m 1s"),
        (172800 + 120, "2d 2m"),
    ],
)
def test_format_uptime(seconds, expected):
    assert format_uptime(seconds) == expected


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "UP"
    assert body["environment"] == "dev"
    assert body["uptime"] >= 0
    assert "timestamp" in body


def test_health_detail(client):
    resp = client.get("/health/detail")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "UP"
    assert body["database"]["status"] == "Connected"
    assert body["database"]["name"] == "sqlite"
    assert body["system"]["memory"]["unit"] == "MB"
    assert body["system"]["memory"]["maxRss"] > 0
    assert isinstance(body["system"]["uptime"]["seconds"], int)
    assert isinstance(body["system"]["uptime"]["formatted"], str)
    assert body["system"]["pythonVersion"]
    assert body["system"]["platform"]


def test_health_detail_reports_failure(client, monkeypatch):
    from app.api.routers import health

    def explode():
        raise RuntimeError("metrics unavailable")

    monkeypatch.setattr(health, "system_info", explode)
    resp = client.get("/health/detail")
    assert resp.status_code == 500
    assert resp.json()["status"] == "DOWN"
    assert resp.json()["message"] == "metrics unavailable"


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Student Management API"


@pytest.mark.parametrize("path", ["/health", "/health/detail"])
def test_timestamps_carry_utc_offset(client, path):
    timestamp = client.get(path).json()["timestamp"]
    assert timestamp.endswith(("Z", "+00:00"))
