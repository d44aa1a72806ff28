# tests/unit/services/test_alert_summary.py
from datetime import date, datetime, timedelta, timezone

from stockwatch.schemas.inventory import ProductSnapshot
from stockwatch.services.alert_summary import build_tenant_alerts
from stockwatch.services.stock_rules import StockClassifier

TODAY = date(2026, 3, 10)
NOW = datetime(2026, 3, 10, tzinfo=timezone.utc)


def test_low_stock_and_expiring_products_are_reported():
    products = [
        ProductSnapshot(id="P1", name="Milk", quantity=2, expiry=TODAY + timedelta(days=3)),
        ProductSnapshot(id="P2", name="Bread", quantity=40, expiry=TODAY + timedelta(days=30)),
        ProductSnapshot(id="P3", name="Eggs", quantity=0),
        ProductSnapshot(id="P4", name="Cheese", quantity=12, expiry=TODAY - timedelta(days=1)),
    ]

    summary = build_tenant_alerts("T", products, StockClassifier(5), warning_days=7, now=NOW)

    assert [alert.id for alert in summary.low_stock] == ["P3", "P1"]
    assert [(alert.id, alert.days_left) for alert in summary.expiring] == [("P4", -1), ("P1", 3)]
    assert summary.expiring[1].expiry == date(2026, 3, 13)
    assert summary.total_alerts == 4


def test_partial_days_round_up():
    products = [
        ProductSnapshot(id="P1", name="Yogurt", quantity=20, expiry=NOW + timedelta(days=7, hours=2)),
        ProductSnapshot(id="P2", name="Butter", quantity=20, expiry=NOW + timedelta(days=6, hours=22)),
        ProductSnapshot(id="P3", name="Cream", quantity=20, expiry=NOW - timedelta(hours=1)),
    ]

    summary = build_tenant_alerts("T", products, StockClassifier(5), warning_days=7, now=NOW)

    assert [(alert.id, alert.days_left) for alert in summary.expiring] == [("P3", 0), ("P2", 7)]


def test_serialises_with_camel_case_keys():
    summary = build_tenant_alerts("T", [ProductSnapshot(id="P1", name="Milk", quantity=1)], StockClassifier(5), now=NOW)

    body = summary.model_dump(by_alias=True)

    assert body["tenantId"] == "T"
    assert body["totalAlerts"] == 1
    assert body["lowStock"][0]["name"] == "Milk"
