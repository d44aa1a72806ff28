"""
Pure planning step shared by every trigger.

Each ``plan_*`` function takes records that were already fetched and
returns the dispatches to perform. Nothing here touches the store or the
mail transport, so the crossing and batching rules can be tested alone.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from stockwatch.schemas.inventory import ProductSnapshot, SupplierRecord
from stockwatch.services.stock_rules import StockClassifier
from stockwatch.services.supplier_matcher import match_suppliers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchInstruction:
    """One email to one supplier naming one or more critical products."""
    supplier: SupplierRecord
    products: Tuple[ProductSnapshot, ...]

    @property
    def product_ids(self) -> List[str]:
        return [product.id for product in self.products]


def _deliverable(supplier: SupplierRecord) -> bool:
    if supplier.email:
        return True
    logger.info("Supplier %s has no email address; skipping", supplier.id or supplier.name)
    return False


def plan_product_check(
    product: ProductSnapshot,
    suppliers: Iterable[SupplierRecord],
    classifier: StockClassifier,
) -> List[DispatchInstruction]:
    """One instruction per matching supplier if ``product`` is critical now."""
    if not classifier.is_critical(product.quantity):
        return []
    return [
        DispatchInstruction(supplier=supplier, products=(product,))
        for supplier in match_suppliers(suppliers, product.id)
        if _deliverable(supplier)
    ]


def plan_product_write(
    before: Optional[ProductSnapshot],
    after: Optional[ProductSnapshot],
    suppliers: Iterable[SupplierRecord],
    classifier: StockClassifier,
) -> List[DispatchInstruction]:
    """Dispatches caused by one product write.

    Deletions and writes that do not cross into critical stock plan nothing.
    """
    if after is None:
        return []
    old_quantity = before.quantity if before is not None else None
    if not classifier.has_just_become_critical(old_quantity, after.quantity):
        return []
    return plan_product_check(after, suppliers, classifier)


def plan_sweep(
    products: Sequence[ProductSnapshot],
    suppliers: Iterable[SupplierRecord],
    classifier: StockClassifier,
) -> List[DispatchInstruction]:
    """Batch every critical product of a tenant by supplier.

    A supplier watching several critical products gets a single instruction
    listing all of them.
    """
    critical = [product for product in products if classifier.is_critical(product.quantity)]
    if not critical:
        return []

    instructions: List[DispatchInstruction] = []
    for supplier in suppliers:
        if not supplier.auto_email:
            continue
        watched = tuple(product for product in critical if supplier.monitors(product.id))
        if watched and _deliverable(supplier):
            instructions.append(DispatchInstruction(supplier=supplier, products=watched))
    return instructions


def auto_email_switched_on(before: Optional[SupplierRecord], after: Optional[SupplierRecord]) -> bool:
    if after is None or not after.auto_email:
        return False
    return before is None or not before.auto_email


def plan_supplier_enabled(
    before: Optional[SupplierRecord],
    after: Optional[SupplierRecord],
    products: Sequence[ProductSnapshot],
    classifier: StockClassifier,
) -> List[DispatchInstruction]:
    """Catch a supplier up when it switches autoEmail on.

    Only the off -> on edge plans anything: one combined instruction with the
    watched products that are already critical.
    """
    if not auto_email_switched_on(before, after):
        return []
    return plan_sweep(products, [after], classifier)
