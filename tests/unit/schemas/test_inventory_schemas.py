# tests/unit/schemas/test_inventory_schemas.py
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from stockwatch.schemas.events import ProductWrittenEvent, SupplierWrittenEvent
from stockwatch.schemas.inventory import ProductSnapshot, SupplierRecord


def test_supplier_accepts_document_field_names():
    supplier = SupplierRecord.model_validate({
        "id": "S1",
        "name": "Acme",
        "email": " s@x.com ",
        "autoEmail": True,
        "selectedProducts": ["P1", "P2"],
    })

    assert supplier.auto_email is True
    assert supplier.email == "s@x.com"
    assert supplier.monitors("P2")


@pytest.mark.parametrize("value", ["true", 1, "yes", None])
def test_only_boolean_true_opts_in(value):
    supplier = SupplierRecord.model_validate({"id": "S1", "autoEmail": value})

    assert supplier.auto_email is False


def test_blank_email_is_missing():
    assert SupplierRecord.model_validate({"id": "S1", "email": "  "}).email is None


def test_product_defaults_and_display_sku():
    product = ProductSnapshot.model_validate({"id": "P1", "name": None, "quantity": None, "sku": ""})

    assert product.name == ""
    assert product.quantity == 0
    assert product.sku is None
    assert product.display_sku == "N/A"


def test_product_rejects_negative_quantity():
    with pytest.raises(ValidationError):
        ProductSnapshot(id="P1", quantity=-1)


def test_product_keeps_integer_quantities():
    assert isinstance(ProductSnapshot(id="P1", quantity=3).quantity, int)


@pytest.mark.parametrize("raw", ["2026-05-01T10:30:00Z", datetime(2026, 5, 1, 10, 30)])
def test_product_expiry_keeps_the_time_of_day(raw):
    assert ProductSnapshot(id="P1", expiry=raw).expiry == datetime(2026, 5, 1, 10, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize("raw", ["2026-05-01", date(2026, 5, 1)])
def test_product_expiry_date_means_midnight(raw):
    assert ProductSnapshot(id="P1", expiry=raw).expiry == datetime(2026, 5, 1, tzinfo=timezone.utc)


def test_product_event_stamps_ids_on_snapshots():
    event = ProductWrittenEvent.model_validate({
        "tenantId": "T",
        "productId": "P1",
        "before": {"name": "Widget", "quantity": 10},
        "after": {"name": "Widget", "quantity": 2},
    })

    assert event.before.id == "P1"
    assert event.after.id == "P1"
    assert not event.is_deletion


def test_product_event_without_after_is_a_deletion():
    event = ProductWrittenEvent.model_validate({"tenantId": "T", "productId": "P1", "before": {"quantity": 3}})

    assert event.is_deletion


def test_supplier_event_requires_ids():
    with pytest.raises(ValidationError):
        SupplierWrittenEvent.model_validate({"tenantId": "", "supplierId": "S1"})
