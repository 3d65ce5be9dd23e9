"""
Pytest configuration and shared fixtures.
"""

from collections.abc import AsyncGenerator
from datetime import date, timedelta
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from workqueue.api.main import create_app
from workqueue.config import Settings, get_settings
from workqueue.db import close_db, create_schema, init_db
from workqueue.db.connection import get_test_engine


@pytest.fixture
def database_url(tmp_path) -> str:
    """Get a fresh SQLite database URL for each test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'work_queue_test.db'}"


@pytest_asyncio.fixture
async def async_engine(database_url: str):
    """Create an async database engine with the schema in place."""
    engine = get_test_engine(database_url)
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine) -> AsyncGenerator[AsyncSession]:
    """Create a database session for tests."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session

        # Rollback any uncommitted changes
        await session.rollback()


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        log_level="DEBUG",
        log_format="console",
        currency_symbol="฿",
        display_locale="en",
        urgent_window_days=3,
    )


@pytest_asyncio.fixture
async def app(database_url: str, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[FastAPI]:
    """Create a FastAPI app for testing with an initialized database."""
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("DISPLAY_LOCALE", "en")
    monkeypatch.setenv("CURRENCY_SYMBOL", "฿")
    get_settings.cache_clear()

    await init_db()

    app = create_app()
    yield app

    # Cleanup
    await close_db()
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create an async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def today() -> date:
    return date.today()


@pytest.fixture
def sample_record(today: date) -> dict[str, Any]:
    """Create sample record fields as the repository takes them."""
    return {
        "customer_name": "Ploy",
        "contact_handle": "ploy#1234",
        "price": Decimal("1500.00"),
        "description": "Full-body character sheet\nTwo outfits",
        "deadline": today + timedelta(days=7),
    }


@pytest.fixture
def sample_form(today: date) -> dict[str, str]:
    """Create a sample add submission as the board form sends it."""
    return {
        "action": "add",
        "customer_name": "Ploy",
        "discord_id": "ploy#1234",
        "price": "1500",
        "description": "Full-body character sheet\nTwo outfits",
        "deadline": (today + timedelta(days=7)).isoformat(),
    }
