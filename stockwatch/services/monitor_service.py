"""
Trigger adapters for the critical stock pipeline.

Four entry points feed the same plan -> dispatch flow:

- ``handle_product_write``: reactive, fired for every product write. It
  compares the before/after quantities, so a product is announced once per
  crossing into critical stock.
- ``sweep_all``: scheduled scan of every tenant. It has no previous state,
  so while a product stays critical every sweep notifies again (at most once
  per sweep interval).
- ``check_product``: the sweep restricted to one product.
- ``handle_supplier_write``: a supplier that switches autoEmail on gets one
  combined email with its watched products that are already critical.

Dispatch failures are recorded per supplier and never abort sibling work.
"""

import asyncio
import logging
import weakref
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from stockwatch.core.enums import TriggerSource
from stockwatch.core.exceptions import DispatchError, ProductNotFoundError, StoreUnavailableError, TenantNotFoundError
from stockwatch.schemas.events import ProductWrittenEvent, SupplierWrittenEvent
from stockwatch.schemas.responses import TenantAlertsResponse
from stockwatch.services.alert_summary import DEFAULT_EXPIRY_WARNING_DAYS, build_tenant_alerts
from stockwatch.services.inventory_store import InventoryStore
from stockwatch.services.notification_service import EmailNotificationService
from stockwatch.services.pipeline import (
    DispatchInstruction,
    auto_email_switched_on,
    plan_product_check,
    plan_product_write,
    plan_supplier_enabled,
    plan_sweep,
)
from stockwatch.services.stock_rules import StockClassifier
from stockwatch.services.supplier_matcher import find_notifiable_suppliers

logger = logging.getLogger(__name__)


@dataclass
class DispatchOutcome:
    """One attempted email (a notification event when it succeeded)."""
    tenant_id: str
    supplier_id: str
    recipient: str
    product_ids: List[str]
    success: bool
    error: Optional[str] = None
    at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class MonitorResult:
    trigger: TriggerSource
    tenants_checked: int = 0
    critical_products: int = 0
    outcomes: List[DispatchOutcome] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def emails_sent(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def emails_failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.success)


class StockMonitor:
    def __init__(
        self,
        store: Optional[InventoryStore],
        notifier: EmailNotificationService,
        classifier: StockClassifier,
        max_concurrent: int = 2,
        expiry_warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS,
    ):
        self.store = store
        self.notifier = notifier
        self.classifier = classifier
        self.expiry_warning_days = expiry_warning_days
        self._dispatch_slots = asyncio.Semaphore(max(1, max_concurrent))
        self._write_locks: "weakref.WeakValueDictionary[tuple, asyncio.Lock]" = weakref.WeakValueDictionary()

    @classmethod
    def from_settings(cls, settings, store: Optional[InventoryStore], notifier: EmailNotificationService) -> "StockMonitor":
        return cls(
            store=store,
            notifier=notifier,
            classifier=StockClassifier.from_settings(settings),
            max_concurrent=settings.SWEEP_MAX_CONCURRENT,
            expiry_warning_days=settings.EXPIRY_WARNING_DAYS,
        )

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------
    def _require_store(self) -> InventoryStore:
        if self.store is None:
            raise StoreUnavailableError("Data store is not configured")
        return self.store

    def ensure_ready(self) -> None:
        """Raise a ConfigurationError subclass if a collaborator is missing."""
        self._require_store()
        self.notifier.ensure_configured()

    # ------------------------------------------------------------------
    # Trigger adapters
    # ------------------------------------------------------------------
    async def handle_product_write(self, event: ProductWrittenEvent) -> MonitorResult:
        result = MonitorResult(trigger=TriggerSource.REACTIVE)
        self.ensure_ready()

        if event.is_deletion:
            logger.info("Product %s/%s was deleted; nothing to check", event.tenant_id, event.product_id)
            return result

        # Writes to one product are handled in arrival order
        async with self._write_lock(event.tenant_id, event.product_id):
            old_quantity = event.before.quantity if event.before is not None else None
            if not self.classifier.has_just_become_critical(old_quantity, event.after.quantity):
                if self.classifier.is_critical(event.after.quantity):
                    logger.info(
                        "Product %s/%s was already critical (%s -> %s); not notifying again",
                        event.tenant_id, event.product_id, old_quantity, event.after.quantity,
                    )
                return result

            logger.info(
                "Product %s/%s reached critical stock: %s unit(s)",
                event.tenant_id, event.product_id, event.after.quantity,
            )
            result.critical_products = 1
            suppliers = await find_notifiable_suppliers(self.store, event.tenant_id, event.product_id)
            instructions = plan_product_write(event.before, event.after, suppliers, self.classifier)
            await self._execute(event.tenant_id, instructions, result)

        return result

    async def check_product(self, tenant_id: str, product_id: str) -> MonitorResult:
        result = MonitorResult(trigger=TriggerSource.ON_DEMAND, tenants_checked=1)
        self.ensure_ready()

        product = await self.store.get_product(tenant_id, product_id)
        if product is None:
            raise ProductNotFoundError(f"Product {product_id} not found in tenant {tenant_id}")

        if not self.classifier.is_critical(product.quantity):
            return result

        result.critical_products = 1
        suppliers = await find_notifiable_suppliers(self.store, tenant_id, product_id)
        instructions = plan_product_check(product, suppliers, self.classifier)
        await self._execute(tenant_id, instructions, result)
        return result

    async def sweep_all(self) -> MonitorResult:
        result = MonitorResult(trigger=TriggerSource.SWEEP)
        self.ensure_ready()

        logger.info("=== CRITICAL STOCK SWEEP STARTING ===")
        tenant_ids = await self.store.list_tenant_ids()
        for tenant_id in tenant_ids:
            result.tenants_checked += 1
            try:
                await self._sweep_tenant(tenant_id, result)
            except Exception as exc:
                logger.exception(f"Error sweeping tenant {tenant_id}: {exc}")
                result.errors.append(f"{tenant_id}: {exc}")

        logger.info(
            f"Sweep finished: {result.tenants_checked} tenant(s), {result.critical_products} critical product(s), "
            f"{result.emails_sent} email(s) sent, {result.emails_failed} failed"
        )
        return result

    async def handle_supplier_write(self, event: SupplierWrittenEvent) -> MonitorResult:
        result = MonitorResult(trigger=TriggerSource.SUPPLIER_ENABLED)
        self.ensure_ready()

        if not auto_email_switched_on(event.before, event.after):
            return result

        logger.info(
            "autoEmail switched on for supplier %s/%s; checking critical products",
            event.tenant_id, event.supplier_id,
        )
        products = await self.store.list_products(event.tenant_id, max_quantity=self.classifier.threshold)
        result.critical_products = sum(1 for product in products if event.after.monitors(product.id))
        instructions = plan_supplier_enabled(event.before, event.after, products, self.classifier)
        await self._execute(event.tenant_id, instructions, result)
        return result

    async def tenant_alerts(self, tenant_id: str) -> TenantAlertsResponse:
        store = self._require_store()
        if not await store.tenant_exists(tenant_id):
            raise TenantNotFoundError(f"Tenant {tenant_id} not found")
        products = await store.list_products(tenant_id)
        return build_tenant_alerts(tenant_id, products, self.classifier, self.expiry_warning_days)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _write_lock(self, tenant_id: str, product_id: str) -> asyncio.Lock:
        key = (tenant_id, product_id)
        lock = self._write_locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._write_locks[key] = lock
        return lock

    async def _sweep_tenant(self, tenant_id: str, result: MonitorResult) -> None:
        products = await self.store.list_products(tenant_id, max_quantity=self.classifier.threshold)
        critical = [product for product in products if self.classifier.is_critical(product.quantity)]
        if not critical:
            return
        result.critical_products += len(critical)

        suppliers = await self.store.list_suppliers(tenant_id, auto_email_only=True)
        instructions = plan_sweep(critical, suppliers, self.classifier)
        await self._execute(tenant_id, instructions, result)

    async def _execute(self, tenant_id: str, instructions: Sequence[DispatchInstruction], result: MonitorResult) -> None:
        if not instructions:
            return
        outcomes = await asyncio.gather(*(self._dispatch_one(tenant_id, instruction) for instruction in instructions))
        result.outcomes.extend(outcomes)

    async def _dispatch_one(self, tenant_id: str, instruction: DispatchInstruction) -> DispatchOutcome:
        supplier = instruction.supplier
        async with self._dispatch_slots:
            try:
                recipient = await self.notifier.dispatch(supplier, instruction.products)
            except DispatchError as exc:
                logger.error(f"Alert for supplier {supplier.id} in tenant {tenant_id} not delivered: {exc}")
                return DispatchOutcome(
                    tenant_id=tenant_id,
                    supplier_id=supplier.id,
                    recipient=exc.recipient,
                    product_ids=instruction.product_ids,
                    success=False,
                    error=exc.reason,
                )
            except Exception as exc:
                logger.exception(f"Unexpected error alerting supplier {supplier.id} in tenant {tenant_id}: {exc}")
                return DispatchOutcome(
                    tenant_id=tenant_id,
                    supplier_id=supplier.id,
                    recipient=supplier.email or "",
                    product_ids=instruction.product_ids,
                    success=False,
                    error=str(exc),
                )
        return DispatchOutcome(
            tenant_id=tenant_id,
            supplier_id=supplier.id,
            recipient=recipient,
            product_ids=instruction.product_ids,
            success=True,
        )
