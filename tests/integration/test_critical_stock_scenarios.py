# tests/integration/test_critical_stock_scenarios.py
"""
End-to-end scenarios through the HTTP surface, with the in-memory store
standing in for the document database and a recording mail transport.
"""


def write(test_client, store, quantity):
    before, after = store.set_quantity("T", "P1", quantity)
    return test_client.post("/webhooks/products/written", json={
        "tenantId": "T",
        "productId": "P1",
        "before": before.model_dump(by_alias=True, mode="json"),
        "after": after.model_dump(by_alias=True, mode="json"),
    })


def test_reactive_writes_notify_once_per_crossing(test_client, seeded_store, transport):
    first = write(test_client, seeded_store, 2)

    assert first.json()["emailsSent"] == 1
    assert transport.recipients == ["s@x.com"]
    body = transport.bodies()[0]
    assert "Widget" in body
    assert "Current quantity: 2 unit(s)" in body

    second = write(test_client, seeded_store, 1)

    assert second.json()["emailsSent"] == 0
    assert len(transport.sent) == 1


def test_sweep_renotifies_while_product_stays_critical(test_client, seeded_store, transport):
    seeded_store.set_quantity("T", "P1", 2)

    first = test_client.post("/monitor-products").json()
    second = test_client.post("/monitor-products").json()

    assert first["emailsSent"] == 1
    assert second["emailsSent"] == 1
    assert transport.recipients == ["s@x.com", "s@x.com"]


def test_sweep_sends_one_combined_email_per_supplier(test_client, seeded_store, transport):
    seeded_store.add_product("T", "P2", name="Gadget", quantity=3)
    seeded_store.add_supplier("T", "S1", name="Acme", email="s@x.com", autoEmail=True, selectedProducts=["P1", "P2"])
    seeded_store.set_quantity("T", "P1", 0)

    response = test_client.post("/monitor-products").json()

    assert response["emailsSent"] == 1
    body = transport.bodies()[0]
    assert "Widget" in body and "Gadget" in body


def test_tenants_are_isolated(test_client, seeded_store, transport):
    seeded_store.add_product("OTHER", "P1", name="Other widget", quantity=1)

    response = test_client.post("/check-product/OTHER/P1").json()

    assert response["emailsSent"] == 0
    assert transport.sent == []
