"""Low stock and expiry alerts for one tenant, as the app's bell shows them."""

import math
from datetime import datetime, timezone
from typing import Iterable, Optional

from stockwatch.schemas.inventory import ProductSnapshot
from stockwatch.schemas.responses import ExpiryAlert, LowStockAlert, TenantAlertsResponse
from stockwatch.services.stock_rules import StockClassifier

DEFAULT_EXPIRY_WARNING_DAYS = 7
SECONDS_PER_DAY = 24 * 60 * 60


def days_until(expiry: datetime, now: datetime) -> int:
    """Whole days left before ``expiry``, rounded up."""
    return math.ceil((expiry - now).total_seconds() / SECONDS_PER_DAY)


def build_tenant_alerts(
    tenant_id: str,
    products: Iterable[ProductSnapshot],
    classifier: StockClassifier,
    warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS,
    now: Optional[datetime] = None,
) -> TenantAlertsResponse:
    now = now or datetime.now(timezone.utc)
    low_stock = []
    expiring = []

    for product in products:
        if classifier.is_critical(product.quantity):
            low_stock.append(LowStockAlert(
                id=product.id,
                name=product.name,
                sku=product.sku,
                quantity=product.quantity,
            ))
        if product.expiry is not None:
            days_left = days_until(product.expiry, now)
            # already expired products stay in the list
            if days_left <= warning_days:
                expiring.append(ExpiryAlert(
                    id=product.id,
                    name=product.name,
                    expiry=product.expiry.date(),
                    days_left=days_left,
                ))

    low_stock.sort(key=lambda alert: (alert.quantity, alert.name))
    expiring.sort(key=lambda alert: (alert.days_left, alert.name))

    return TenantAlertsResponse(
        tenant_id=tenant_id,
        low_stock=low_stock,
        expiring=expiring,
        total_alerts=len(low_stock) + len(expiring),
    )
