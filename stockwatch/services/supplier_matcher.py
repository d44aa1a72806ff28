"""Find the suppliers that should hear about a product."""

import logging
from typing import Iterable, List

from stockwatch.schemas.inventory import SupplierRecord

logger = logging.getLogger(__name__)


def match_suppliers(suppliers: Iterable[SupplierRecord], product_id: str) -> List[SupplierRecord]:
    """Keep suppliers with autoEmail on that monitor ``product_id``.

    Result order carries no meaning.
    """
    return [
        supplier for supplier in suppliers
        if supplier.auto_email and supplier.monitors(product_id)
    ]


async def find_notifiable_suppliers(store, tenant_id: str, product_id: str) -> List[SupplierRecord]:
    """Read the tenant's suppliers and match them against one product."""
    suppliers = await store.list_suppliers(tenant_id, auto_email_only=True)
    matched = match_suppliers(suppliers, product_id)
    logger.debug(
        "%d of %d supplier(s) in tenant %s monitor product %s",
        len(matched), len(suppliers), tenant_id, product_id,
    )
    return matched
