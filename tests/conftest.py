"""
Pytest configuration and fixtures.
"""

from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport

from solobill.core.seed import demo_state
from solobill.core.store import InMemoryStore, get_store
from solobill.main import app
from solobill.models.client import Client
from solobill.models.currency import Currency
from solobill.services.assistant import (
    AssistantService,
    InsightFeed,
    get_assistant_service,
    get_insight_feed,
)


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh store holding the demo clients and invoices."""
    return InMemoryStore(demo_state())


@pytest.fixture
def feed() -> InsightFeed:
    """Fresh insight feed."""
    return InsightFeed()


@pytest.fixture
def assistant() -> AssistantService:
    """Assistant without an API key: every call falls back."""
    return AssistantService(api_key="")


@pytest.fixture
async def client(
    store: InMemoryStore,
    feed: InsightFeed,
    assistant: AssistantService,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with store and assistant overrides."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_insight_feed] = lambda: feed
    app.dependency_overrides[get_assistant_service] = lambda: assistant

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
    feed.reset()


@pytest.fixture
def thb_client() -> Client:
    """Client billed in THB at a negotiated rate."""
    return Client(
        id="thb",
        name="Bangkok Bistro",
        email="ads@bistro.th",
        preferred_currency=Currency.THB,
        exchange_rate="36",
    )


@pytest.fixture
def usd_client() -> Client:
    """Client billed in USD."""
    return Client(id="usd", name="Austin Apps", email="ads@austin.io")
