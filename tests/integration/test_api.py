"""
Integration tests for the JSON API and health endpoints.
"""

from datetime import date, timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient

from workqueue.constants import QueueStatus


@pytest.fixture
def record_body(today: date) -> dict:
    return {
        "customer_name": "Nok",
        "discord_id": "nok.draws",
        "price": "750.00",
        "description": "Chibi pair",
        "deadline": (today + timedelta(days=5)).isoformat(),
    }


class TestQueueAPI:
    """Integration tests for queue API endpoints."""

    @pytest_asyncio.fixture
    async def created_record(self, client: AsyncClient, record_body: dict) -> dict:
        """Create a record for testing."""
        response = await client.post("/v1/queue", json=record_body)
        return response.json()

    async def test_create_record_success(self, client: AsyncClient, record_body: dict):
        """Test successful record creation."""
        response = await client.post("/v1/queue", json=record_body)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] >= 1
        assert data["customer_name"] == "Nok"
        assert data["discord_id"] == "nok.draws"
        assert data["price"] == "750.00"
        assert data["status"] == QueueStatus.PENDING
        assert data["deadline"] == record_body["deadline"]

    async def test_create_record_numeric_price(self, client: AsyncClient, record_body: dict):
        record_body["price"] = 99.5

        response = await client.post("/v1/queue", json=record_body)

        assert response.status_code == 201
        assert response.json()["price"] == "99.50"

    async def test_create_record_rejected(self, client: AsyncClient, record_body: dict):
        """Test that validation failures come back as structured rejections."""
        record_body["price"] = 0
        record_body["customer_name"] = ""

        response = await client.post("/v1/queue", json=record_body)

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "validation_failed"
        assert data["rejections"] == [
            {"field": "customer_name", "reason": "required"},
            {"field": "price", "reason": "not_positive"},
        ]

        listing = await client.get("/v1/queue")
        assert listing.json()["records"] == []

    async def test_create_record_huge_price(self, client: AsyncClient, record_body: dict):
        """Test that a price past decimal precision is a 422, not a crash."""
        record_body["price"] = "1e30"

        response = await client.post("/v1/queue", json=record_body)

        assert response.status_code == 422
        assert response.json()["rejections"] == [{"field": "price", "reason": "too_large"}]

    async def test_ids_increase(self, client: AsyncClient, record_body: dict):
        first = (await client.post("/v1/queue", json=record_body)).json()
        second = (await client.post("/v1/queue", json=record_body)).json()

        assert second["id"] > first["id"]

    async def test_list_records_order(self, client: AsyncClient, record_body: dict, today: date):
        """Test deadline-first ordering with newest first on ties."""
        same_day = (today + timedelta(days=5)).isoformat()
        older = (await client.post("/v1/queue", json={**record_body, "deadline": same_day})).json()
        newer = (await client.post("/v1/queue", json={**record_body, "deadline": same_day})).json()
        earliest = (
            await client.post(
                "/v1/queue",
                json={**record_body, "deadline": (today + timedelta(days=1)).isoformat()},
            )
        ).json()

        response = await client.get("/v1/queue")

        assert response.status_code == 200
        ids = [r["id"] for r in response.json()["records"]]
        assert ids == [earliest["id"], newer["id"], older["id"]]

    async def test_get_record(self, client: AsyncClient, created_record: dict):
        response = await client.get(f"/v1/queue/{created_record['id']}")

        assert response.status_code == 200
        assert response.json() == created_record

    async def test_get_record_not_found(self, client: AsyncClient):
        response = await client.get("/v1/queue/9999")

        assert response.status_code == 404

    async def test_update_status(self, client: AsyncClient, created_record: dict):
        """Test that a status change leaves the other fields untouched."""
        response = await client.patch(
            f"/v1/queue/{created_record['id']}/status",
            json={"status": "in_progress"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == QueueStatus.IN_PROGRESS
        for field in ("id", "customer_name", "discord_id", "price", "description", "deadline"):
            assert data[field] == created_record[field]

    async def test_update_status_invalid(self, client: AsyncClient, created_record: dict):
        response = await client.patch(
            f"/v1/queue/{created_record['id']}/status",
            json={"status": "done"},
        )

        assert response.status_code == 422
        assert response.json()["rejections"] == [
            {"field": "status", "reason": "invalid_status"}
        ]

        current = await client.get(f"/v1/queue/{created_record['id']}")
        assert current.json()["status"] == QueueStatus.PENDING

    async def test_update_status_not_found(self, client: AsyncClient):
        response = await client.patch("/v1/queue/9999/status", json={"status": "completed"})

        assert response.status_code == 404

    async def test_delete_record(self, client: AsyncClient, created_record: dict):
        response = await client.delete(f"/v1/queue/{created_record['id']}")

        assert response.status_code == 204
        missing = await client.get(f"/v1/queue/{created_record['id']}")
        assert missing.status_code == 404

    async def test_delete_record_not_found(self, client: AsyncClient, created_record: dict):
        response = await client.delete("/v1/queue/9999")

        assert response.status_code == 404
        listing = await client.get("/v1/queue")
        assert len(listing.json()["records"]) == 1

    async def test_out_of_range_id_not_found(self, client: AsyncClient, created_record: dict):
        """Test that ids too large for the database answer 404."""
        path = "/v1/queue/99999999999999999999"

        assert (await client.get(path)).status_code == 404
        assert (await client.patch(f"{path}/status", json={"status": "completed"})).status_code == 404
        assert (await client.delete(path)).status_code == 404

        listing = await client.get("/v1/queue")
        assert [r["status"] for r in listing.json()["records"]] == ["pending"]

    async def test_stats_revenue(self, client: AsyncClient, record_body: dict):
        """Test that revenue follows completed records only."""
        done = (await client.post("/v1/queue", json={**record_body, "price": "1000"})).json()
        await client.post("/v1/queue", json={**record_body, "price": "250"})

        before = (await client.get("/v1/queue/stats/summary")).json()
        assert before["revenue"] == "0.00"
        assert before["pending"] == 2

        await client.patch(f"/v1/queue/{done['id']}/status", json={"status": "completed"})

        after = (await client.get("/v1/queue/stats/summary")).json()
        assert after == {
            "total": 2,
            "pending": 1,
            "in_progress": 0,
            "completed": 1,
            "revenue": "1000.00",
        }


class TestHealthAPI:
    """Integration tests for health endpoints."""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["storage"] == "sqlite"

    async def test_ready_and_live(self, client: AsyncClient):
        assert (await client.get("/ready")).json() == {"ready": True}
        assert (await client.get("/live")).json() == {"alive": True}

    async def test_metrics(self, client: AsyncClient, record_body: dict):
        """Test that queue activity shows up in Prometheus output."""
        await client.post("/v1/queue", json=record_body)

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "queue_records_created_total" in response.text
        assert "api_requests_total" in response.text
