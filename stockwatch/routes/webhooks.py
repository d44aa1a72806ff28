"""
Change-notification webhooks from the document store.

The store posts the document before and after every write. When
WEBHOOK_SECRET is set the raw body must be signed with it.
"""

import hashlib
import hmac
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from stockwatch.core.config import Settings, get_settings
from stockwatch.core.exceptions import ConfigurationError
from stockwatch.dependencies import get_stock_monitor
from stockwatch.schemas.events import ProductWrittenEvent, SupplierWrittenEvent
from stockwatch.schemas.responses import MonitorResponse, degraded_response
from stockwatch.services.monitor_service import StockMonitor

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/webhooks", tags=["webhooks"])

SIGNATURE_HEADER = "X-Webhook-Signature"


def sign_payload(secret: str, body: bytes) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


async def verify_webhook_signature(request: Request, settings: Settings = Depends(get_settings)):
    """Verify the webhook signature when a secret is configured"""
    if not settings.WEBHOOK_SECRET:
        return

    signature = request.headers.get(SIGNATURE_HEADER)
    if not signature:
        raise HTTPException(status_code=401, detail="No signature provided")

    body = await request.body()
    expected_signature = sign_payload(settings.WEBHOOK_SECRET, body)
    if not hmac.compare_digest(signature, expected_signature):
        raise HTTPException(status_code=401, detail="Invalid signature")


@router.post("/products/written", response_model=MonitorResponse, response_model_exclude_none=True)
async def product_written(
    event: ProductWrittenEvent,
    monitor: StockMonitor = Depends(get_stock_monitor),
    _: None = Depends(verify_webhook_signature),
):
    """A product document was created, updated or deleted"""
    try:
        result = await monitor.handle_product_write(event)
    except ConfigurationError as exc:
        logger.warning(f"Product write {event.tenant_id}/{event.product_id} not checked: {exc}")
        return degraded_response(exc)

    return MonitorResponse(
        success=True,
        message=f"{result.emails_sent} email(s) sent",
        emails_sent=result.emails_sent,
        emails_failed=result.emails_failed or None,
    )


@router.post("/suppliers/written", response_model=MonitorResponse, response_model_exclude_none=True)
async def supplier_written(
    event: SupplierWrittenEvent,
    monitor: StockMonitor = Depends(get_stock_monitor),
    _: None = Depends(verify_webhook_signature),
):
    """A supplier document was created, updated or deleted"""
    try:
        result = await monitor.handle_supplier_write(event)
    except ConfigurationError as exc:
        logger.warning(f"Supplier write {event.tenant_id}/{event.supplier_id} not checked: {exc}")
        return degraded_response(exc)

    return MonitorResponse(
        success=True,
        message=f"{result.emails_sent} email(s) sent",
        emails_sent=result.emails_sent,
        emails_failed=result.emails_failed or None,
    )
