from typing import Dict, List, Optional, Set, Tuple

from stockwatch.core.exceptions import StoreUnavailableError
from stockwatch.schemas.inventory import ProductSnapshot, SupplierRecord
from stockwatch.services.inventory_store import InventoryStore


class MockInventoryStore(InventoryStore):
    """In-memory tenants/products/suppliers, validated like the real store."""

    def __init__(self):
        self.products: Dict[str, Dict[str, ProductSnapshot]] = {}
        self.suppliers: Dict[str, Dict[str, SupplierRecord]] = {}
        self.failing_tenants: Set[str] = set()  # Toggle to test error scenarios
        self.calls: list = []  # Track calls for testing

    # --- seeding helpers -------------------------------------------------
    def add_tenant(self, tenant_id: str):
        self.products.setdefault(tenant_id, {})
        self.suppliers.setdefault(tenant_id, {})

    def add_product(self, tenant_id: str, product_id: str, **fields) -> ProductSnapshot:
        self.add_tenant(tenant_id)
        product = ProductSnapshot.model_validate({"id": product_id, **fields})
        self.products[tenant_id][product_id] = product
        return product

    def add_supplier(self, tenant_id: str, supplier_id: str, **fields) -> SupplierRecord:
        self.add_tenant(tenant_id)
        supplier = SupplierRecord.model_validate({"id": supplier_id, **fields})
        self.suppliers[tenant_id][supplier_id] = supplier
        return supplier

    def set_quantity(self, tenant_id: str, product_id: str, quantity) -> Tuple[ProductSnapshot, ProductSnapshot]:
        """Write a new quantity and return the (before, after) pair."""
        before = self.products[tenant_id][product_id]
        after = before.model_copy(update={"quantity": quantity})
        self.products[tenant_id][product_id] = after
        return before, after

    # --- InventoryStore ----------------------------------------------------
    def _check(self, tenant_id: str):
        if tenant_id in self.failing_tenants:
            raise StoreUnavailableError(f"Tenant {tenant_id} could not be read")

    async def list_tenant_ids(self) -> List[str]:
        self.calls.append(("list_tenant_ids",))
        return sorted(self.products)

    async def tenant_exists(self, tenant_id: str) -> bool:
        self.calls.append(("tenant_exists", tenant_id))
        return tenant_id in self.products

    async def get_product(self, tenant_id: str, product_id: str) -> Optional[ProductSnapshot]:
        self.calls.append(("get_product", tenant_id, product_id))
        self._check(tenant_id)
        return self.products.get(tenant_id, {}).get(product_id)

    async def list_products(self, tenant_id: str, max_quantity=None) -> List[ProductSnapshot]:
        self.calls.append(("list_products", tenant_id, max_quantity))
        self._check(tenant_id)
        products = list(self.products.get(tenant_id, {}).values())
        if max_quantity is not None:
            products = [product for product in products if product.quantity <= max_quantity]
        return products

    async def list_suppliers(self, tenant_id: str, auto_email_only: bool = False) -> List[SupplierRecord]:
        self.calls.append(("list_suppliers", tenant_id, auto_email_only))
        self._check(tenant_id)
        suppliers = list(self.suppliers.get(tenant_id, {}).values())
        if auto_email_only:
            suppliers = [supplier for supplier in suppliers if supplier.auto_email]
        return suppliers
