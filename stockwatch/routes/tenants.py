import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from stockwatch.core.exceptions import ConfigurationError, TenantNotFoundError
from stockwatch.dependencies import get_stock_monitor
from stockwatch.schemas.responses import TenantAlertsResponse, degraded_response
from stockwatch.services.monitor_service import StockMonitor

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("/{tenant_id}/alerts", response_model=TenantAlertsResponse)
async def tenant_alerts(tenant_id: str, monitor: StockMonitor = Depends(get_stock_monitor)):
    """Products at critical stock and products close to expiry"""
    try:
        return await monitor.tenant_alerts(tenant_id)
    except ConfigurationError as exc:
        body = degraded_response(exc).model_dump(by_alias=True, exclude_none=True)
        return JSONResponse(content=body)
    except TenantNotFoundError:
        raise HTTPException(status_code=404, detail="Tenant not found")
