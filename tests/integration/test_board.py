"""
Integration tests for the board page and its form submissions.
"""

import re
from datetime import date, timedelta
from decimal import Decimal
from urllib.parse import parse_qs, urlparse

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from workqueue.config import get_settings
from workqueue.db.models import QueueRecord


def _stat(html: str, name: str) -> str:
    match = re.search(rf'id="stat-{name}">([^<]*)<', html)
    assert match is not None, f"stat {name} not rendered"
    return match.group(1)


class TestBoard:
    """Integration tests for the board endpoints."""

    async def _records(self, client: AsyncClient) -> list[dict]:
        response = await client.get("/v1/queue")
        return response.json()["records"]

    @pytest_asyncio.fixture
    async def created_record(self, client: AsyncClient, sample_form: dict[str, str]) -> dict:
        """Add a record through the board form."""
        await client.post("/", data=sample_form)
        records = await self._records(client)
        return records[0]

    async def test_empty_board(self, client: AsyncClient):
        """Test rendering with no records."""
        response = await client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "No work queued yet" in response.text
        assert _stat(response.text, "total") == "0"
        assert _stat(response.text, "revenue") == "฿0.00"

    async def test_add_redirects_to_board(self, client: AsyncClient, sample_form: dict[str, str]):
        """Test that a valid add creates a record and redirects with 303."""
        response = await client.post("/", data=sample_form)

        assert response.status_code == 303
        assert response.headers["location"] == "/"

        records = await self._records(client)
        assert len(records) == 1
        assert records[0]["customer_name"] == "Ploy"
        assert records[0]["status"] == "pending"

    async def test_add_rejected_reports_reasons(
        self,
        client: AsyncClient,
        sample_form: dict[str, str],
    ):
        """Test that invalid input creates nothing and is surfaced on the page."""
        sample_form["price"] = "0"
        sample_form["customer_name"] = "  "

        response = await client.post("/", data=sample_form)

        assert response.status_code == 303
        location = response.headers["location"]
        rejected = parse_qs(urlparse(location).query)["rejected"][0]
        assert rejected.split(",") == ["customer_name:required", "price:not_positive"]
        assert await self._records(client) == []

        page = await client.get(location)
        assert "Customer name is required" in page.text
        assert "Price must be greater than zero" in page.text

    async def test_malformed_price_is_rejected(
        self,
        client: AsyncClient,
        sample_form: dict[str, str],
    ):
        """Test that a non-numeric price coerces to zero and is rejected."""
        sample_form["price"] = "lots"

        response = await client.post("/", data=sample_form)

        assert "price%3Anot_positive" in response.headers["location"]
        assert await self._records(client) == []

    async def test_huge_price_is_rejected(
        self,
        client: AsyncClient,
        sample_form: dict[str, str],
    ):
        """Test that a price past decimal precision is rejected as too large."""
        sample_form["price"] = "1e30"

        response = await client.post("/", data=sample_form)

        assert response.status_code == 303
        assert "price%3Atoo_large" in response.headers["location"]
        assert await self._records(client) == []

    async def test_page_lists_record_details(self, client: AsyncClient, created_record: dict):
        """Test that the rendered record shows its formatted fields."""
        response = await client.get("/")
        html = response.text

        assert "Ploy" in html
        assert "ploy#1234" in html
        assert "฿1,500.00" in html
        assert "Full-body character sheet<br>Two outfits" in html
        assert f'id="record-{created_record["id"]}"' in html
        assert _stat(html, "total") == "1"
        assert _stat(html, "pending") == "1"

    async def test_text_is_escaped(self, client: AsyncClient, sample_form: dict[str, str]):
        sample_form["customer_name"] = "<script>alert(1)</script>"
        await client.post("/", data=sample_form)

        response = await client.get("/")

        assert "<script>alert(1)</script>" not in response.text
        assert "&lt;script&gt;" in response.text

    async def test_update_status_and_revenue(self, client: AsyncClient, created_record: dict):
        """Test that completing a record moves it into revenue."""
        response = await client.post(
            "/",
            data={"action": "update_status", "id": str(created_record["id"]), "status": "completed"},
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/"

        page = await client.get("/")
        assert _stat(page.text, "completed") == "1"
        assert _stat(page.text, "pending") == "0"
        assert _stat(page.text, "revenue") == "฿1,500.00"

    async def test_update_invalid_status_rejected(self, client: AsyncClient, created_record: dict):
        """Test that a status outside the closed set never reaches storage."""
        response = await client.post(
            "/",
            data={"action": "update_status", "id": str(created_record["id"]), "status": "archived"},
        )

        assert "status%3Ainvalid_status" in response.headers["location"]
        records = await self._records(client)
        assert records[0]["status"] == "pending"

    async def test_update_unknown_id_is_noop(self, client: AsyncClient, created_record: dict):
        response = await client.post(
            "/",
            data={"action": "update_status", "id": "9999", "status": "completed"},
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        records = await self._records(client)
        assert records[0]["status"] == "pending"

    async def test_delete(self, client: AsyncClient, created_record: dict):
        """Test that delete removes the record."""
        response = await client.post(
            "/",
            data={"action": "delete", "id": str(created_record["id"])},
        )

        assert response.status_code == 303
        assert await self._records(client) == []

    async def test_delete_unknown_id_is_noop(self, client: AsyncClient, created_record: dict):
        response = await client.post("/", data={"action": "delete", "id": "not-a-number"})

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert len(await self._records(client)) == 1

    async def test_out_of_range_id_is_noop(self, client: AsyncClient, created_record: dict):
        """Test that ids too large for the database change nothing."""
        huge_id = "99999999999999999999"

        update = await client.post(
            "/",
            data={"action": "update_status", "id": huge_id, "status": "completed"},
        )
        delete = await client.post("/", data={"action": "delete", "id": huge_id})

        assert update.status_code == 303
        assert update.headers["location"] == "/"
        assert delete.status_code == 303
        assert delete.headers["location"] == "/"
        records = await self._records(client)
        assert len(records) == 1
        assert records[0]["status"] == "pending"

    async def test_unknown_action_rejected(self, client: AsyncClient):
        response = await client.post("/", data={"action": "archive"})

        assert response.status_code == 303
        assert "action%3Aunknown_action" in response.headers["location"]

    async def test_urgent_marker(self, client: AsyncClient, sample_form: dict[str, str]):
        """Test that only records due within three days carry the urgent marker."""
        today = date.today()
        await client.post(
            "/",
            data={**sample_form, "customer_name": "Soon", "deadline": (today + timedelta(days=2)).isoformat()},
        )
        await client.post(
            "/",
            data={**sample_form, "customer_name": "Later", "deadline": (today + timedelta(days=4)).isoformat()},
        )

        html = (await client.get("/")).text

        assert html.count("(urgent!)") == 1
        assert html.index("Soon") < html.index("(urgent!)") < html.index("Later")

    async def test_thai_locale_translates_page(
        self,
        client: AsyncClient,
        sample_form: dict[str, str],
        monkeypatch: pytest.MonkeyPatch,
    ):
        """Test that the whole page follows the Thai display locale."""
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        await client.post("/", data={**sample_form, "deadline": tomorrow})

        monkeypatch.setenv("DISPLAY_LOCALE", "th")
        get_settings.cache_clear()
        html = (await client.get("/")).text

        assert "ระบบจดบันทึกคิวงาน" in html
        assert "คิวทั้งหมด" in html
        assert "เพิ่มคิวงานใหม่" in html
        assert "ชื่อลูกค้า" in html
        assert "(เร่งด่วน!)" in html
        assert "(urgent!)" not in html
        assert "Add work" not in html

    async def test_unknown_status_is_selected_as_unknown(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
    ):
        """Test that a stored status outside the lifecycle is not shown as pending."""
        db_session.add(
            QueueRecord(
                customer_name="Legacy",
                discord_id="legacy#1",
                price=Decimal("10.00"),
                description="Imported row",
                deadline=date.today() + timedelta(days=10),
                status="archived",
            )
        )
        await db_session.commit()

        html = (await client.get("/")).text

        assert '<option value="" selected disabled>unknown</option>' in html
        assert re.search(r'<option value="\w+" selected>', html) is None
