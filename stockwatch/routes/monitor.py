"""
Monitoring endpoints: the scheduled sweep and the single product check.

A missing data store or mail transport is reported with ``success: false``
and HTTP 200, never as a server error.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from stockwatch.core.exceptions import ConfigurationError, ProductNotFoundError
from stockwatch.dependencies import get_stock_monitor
from stockwatch.schemas.responses import MonitorResponse, degraded_response
from stockwatch.services.monitor_service import StockMonitor

logger = logging.getLogger(__name__)
router = APIRouter(tags=["monitor"])


@router.post("/monitor-products", response_model=MonitorResponse, response_model_exclude_none=True)
async def monitor_products(monitor: StockMonitor = Depends(get_stock_monitor)):
    """Run the critical stock sweep over every tenant.

    Sweeps have no memory of earlier runs: a product that stays critical is
    announced again on every run.
    """
    try:
        result = await monitor.sweep_all()
    except ConfigurationError as exc:
        logger.warning(f"Sweep skipped: {exc}")
        return degraded_response(exc)

    return MonitorResponse(
        success=True,
        message=f"Monitoring complete. {result.emails_sent} email(s) sent",
        emails_sent=result.emails_sent,
        emails_failed=result.emails_failed or None,
    )


@router.post(
    "/check-product/{tenant_id}/{product_id}",
    response_model=MonitorResponse,
    response_model_exclude_none=True,
)
async def check_product(
    tenant_id: str,
    product_id: str,
    monitor: StockMonitor = Depends(get_stock_monitor),
):
    """Check one product now and alert its suppliers if it is critical"""
    try:
        result = await monitor.check_product(tenant_id, product_id)
    except ConfigurationError as exc:
        logger.warning(f"Product check skipped: {exc}")
        return degraded_response(exc)
    except ProductNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found")

    if not result.critical_products:
        return MonitorResponse(success=True, message="Product is not at critical stock", emails_sent=0)

    return MonitorResponse(
        success=True,
        message=f"{result.emails_sent} email(s) sent",
        emails_sent=result.emails_sent,
        emails_failed=result.emails_failed or None,
    )
