"""
Pytest configuration and shared fixtures.

Provides a deterministic order store, a recording order service that can
be told to fail, session managers wired to temp token files, and clients
for the FastAPI app (sync TestClient and async httpx over ASGI).
"""
import random
from datetime import datetime, timedelta, timezone
from typing import Generator

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from canteen.core.config import get_settings
from canteen.main import create_app
from canteen.schemas import CreateOrderRequest, MenuCategory, MenuItem, Order
from canteen.services.notifications import LogNotifier
from canteen.services.orders import LocalOrderService, OrderServiceError, reset_order_service
from canteen.session import SessionManager, TokenFile
from canteen.store import OrderStore


# ── Helpers ──────────────────────────────────────────────────────────


class Ticker:
    """Clock advancing one second per call."""

    def __init__(self, start: datetime = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


class ScriptedRandom:
    """Stand-in for random.Random whose randint replays fixed values."""

    def __init__(self, values):
        self.values = list(values)

    def randint(self, a, b):
        return self.values.pop(0) if len(self.values) > 1 else self.values[0]


class RecordingOrderService(LocalOrderService):
    """LocalOrderService that records calls and can fail on demand."""

    def __init__(self, store: OrderStore):
        super().__init__(store)
        self.calls: list[str] = []
        self.fail_on: set[str] = set()

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise OrderServiceError(f"{name} failed (simulated)")

    async def create_order(self, request: CreateOrderRequest) -> Order:
        self._record("create")
        return await super().create_order(request)

    async def get_orders(self) -> list[Order]:
        self._record("get")
        return await super().get_orders()

    async def complete_order(self, token: str) -> None:
        self._record("complete")
        await super().complete_order(token)


def make_item(item_id: str = "a", price: float = 10.0, **overrides) -> MenuItem:
    fields = {
        "id": item_id,
        "name": f"Item {item_id}",
        "description": f"Description of {item_id}",
        "price": price,
        "image": f"/images/{item_id}.jpg",
        "category": MenuCategory.STARTERS,
    }
    fields.update(overrides)
    return MenuItem(**fields)


# ── Settings ─────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path) -> Generator[None, None, None]:
    """Isolate cached settings and services from the developer's environment."""
    monkeypatch.setenv("ENV_MODE", "development")
    monkeypatch.setenv("SESSION_FILE", str(tmp_path / "session" / "tokens.json"))
    get_settings.cache_clear()
    reset_order_service()
    yield
    get_settings.cache_clear()
    reset_order_service()


# ── Store & Session Fixtures ─────────────────────────────────────────


@pytest.fixture
def clock() -> Ticker:
    return Ticker()


@pytest.fixture
def store(clock) -> OrderStore:
    return OrderStore(rng=random.Random(42), clock=clock)


@pytest.fixture
def order_service(store) -> RecordingOrderService:
    return RecordingOrderService(store)


@pytest.fixture
def token_file(tmp_path) -> TokenFile:
    return TokenFile(path=tmp_path / "my_tokens.json")


@pytest.fixture
def notifier() -> LogNotifier:
    return LogNotifier()


@pytest.fixture
def session(order_service, token_file, notifier) -> SessionManager:
    return SessionManager(order_service, token_file=token_file, notifier=notifier)


# ── API Fixtures ─────────────────────────────────────────────────────


@pytest.fixture
def api_store(clock) -> OrderStore:
    return OrderStore(rng=random.Random(7), clock=clock)


@pytest.fixture
def app(api_store):
    return create_app(store=api_store)


@pytest.fixture
def test_client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as client:
        yield client


@pytest_asyncio.fixture
async def asgi_client(app):
    """httpx client routed straight into the FastAPI app."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
