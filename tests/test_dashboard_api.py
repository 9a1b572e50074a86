"""API tests for /api/dashboard/stats."""

import asyncio
import time

import httpx

from app.api.deps.services import get_stats_aggregator
from app.core.errors import StorageError
from app.main import app
from app.services.stats_service import StatsAggregator
from app.services.store import StudentStore


def test_stats_empty(client):
    resp = client.get("/api/dashboard/stats")
    assert resp.status_code == 200
    assert resp.json() == {
        "totalStudents": 0,
        "totalCourses": 0,
        "activeStudents": 0,
        "activeCourses": 0,
        "graduates": 0,
        "courseCounts": {},
        "successRate": 0,
    }


def test_stats_after_writes(client, student_payload):
    client.post("/api/courses", json={"name": "CS101", "description": "Intro", "duration": 12})
    client.post("/api/courses", json={"name": "CS102", "description": "More", "duration": 12, "status": "Inactive"})
    for i, status in enumerate(["Active", "Active", "Inactive"]):
        resp = client.post(
            "/api/students",
            json=dict(student_payload, email=f"student{i}@example.com", status=status),
        )
        assert resp.status_code == 201

    first = client.get("/api/dashboard/stats").json()
    assert first["totalStudents"] == 3
    assert first["activeStudents"] == 2
    assert first["graduates"] == 1
    assert first["successRate"] == 33
    assert first["totalCourses"] == 2
    assert first["activeCourses"] == 1
    assert first["courseCounts"] == {"null": 2}

    # No writes in between, same answer
    assert client.get("/api/dashboard/stats").json() == first


class FailingStore:
    def count(self, **filters):
        raise StorageError("connection reset by peer")

    def group_and_count(self, field):
        raise StorageError("connection reset by peer")


def test_stats_storage_failure_hides_detail(client):
    app.dependency_overrides[get_stats_aggregator] = lambda: StatsAggregator(FailingStore(), FailingStore())
    resp = client.get("/api/dashboard/stats")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}
    assert "connection reset" not in resp.text


def test_slow_stats_do_not_block_other_requests(client, monkeypatch):
    original_count = StudentStore.count

    def slow_count(self, **filters):
        time.sleep(0.5)
        return original_count(self, **filters)

    monkeypatch.setattr(StudentStore, "count", slow_count)

    async def fire_both():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            start = time.monotonic()

            async def stats():
                resp = await ac.get("/api/dashboard/stats")
                return resp, time.monotonic() - start

            async def liveness():
                await asyncio.sleep(0.2)
                resp = await ac.get("/health")
                return resp, time.monotonic() - start

            return await asyncio.gather(stats(), liveness())

    (stats_resp, stats_done), (health_resp, health_done) = asyncio.run(fire_both())

    assert stats_resp.status_code == 200
    assert health_resp.status_code == 200
    # Three student counts at 0.5s each
    assert stats_done >= 1.5
    # The liveness check is answered while the stats are still being computed
    assert health_done < 1.0
