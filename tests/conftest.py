# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from stockwatch.core.config import Settings, get_settings
from stockwatch.dependencies import get_stock_monitor
from stockwatch.main import create_app
from stockwatch.services.notification_service import EmailNotificationService
from stockwatch.services.monitor_service import StockMonitor
from tests.mocks import MockInventoryStore, RecordingTransport


@pytest.fixture
def settings():
    """Provide test settings"""
    return Settings(
        DATABASE_URL="",
        SMTP_HOST="smtp.test.local",
        SMTP_USERNAME="alerts@shop.test",
        SMTP_PASSWORD="secret",
        SMTP_FROM_NAME="Shop Alerts",
        CRITICAL_STOCK_THRESHOLD=5,
        DISPATCH_TIMEOUT=2.0,
        SWEEP_MAX_CONCURRENT=2,
        MONITOR_SCHEDULE_ENABLED=False,
        WEBHOOK_SECRET="",
        APP_URL="https://shop.test",
    )


@pytest.fixture
def store():
    return MockInventoryStore()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def notifier(settings, transport):
    return EmailNotificationService(settings, transport=transport)


@pytest.fixture
def monitor(settings, store, notifier):
    return StockMonitor.from_settings(settings, store=store, notifier=notifier)


@pytest.fixture
def seeded_store(store):
    """Tenant T with the Widget product and one opted-in supplier"""
    store.add_product("T", "P1", name="Widget", quantity=10, sku="WID-1")
    store.add_supplier("T", "S1", name="Acme", email="s@x.com", autoEmail=True, selectedProducts=["P1"])
    return store


@pytest.fixture
def test_client(settings, monitor):
    """Provide a test client wired to the in-memory store and transport"""
    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_stock_monitor] = lambda: monitor
    with TestClient(app) as client:
        yield client
