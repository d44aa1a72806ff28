"""
Response bodies of the operational HTTP surface.
"""
from datetime import date
from typing import List, Optional, Union

from pydantic import Field

from stockwatch.schemas.base import BaseSchema


class HealthResponse(BaseSchema):
    status: str
    service: str


class MonitorResponse(BaseSchema):
    success: bool
    message: str
    emails_sent: Optional[int] = Field(default=None, alias="emailsSent")
    emails_failed: Optional[int] = Field(default=None, alias="emailsFailed")
    hint: Optional[str] = None


class LowStockAlert(BaseSchema):
    id: str
    name: str
    sku: Optional[str] = None
    quantity: Union[int, float]


class ExpiryAlert(BaseSchema):
    id: str
    name: str
    expiry: date
    days_left: int = Field(alias="daysLeft")


class TenantAlertsResponse(BaseSchema):
    success: bool = True
    tenant_id: str = Field(alias="tenantId")
    low_stock: List[LowStockAlert] = Field(default_factory=list, alias="lowStock")
    expiring: List[ExpiryAlert] = Field(default_factory=list)
    total_alerts: int = Field(default=0, alias="totalAlerts")


def degraded_response(exc) -> MonitorResponse:
    """Success-shaped body for a service that is missing a collaborator."""
    return MonitorResponse(success=False, message=str(exc), hint=getattr(exc, "hint", None))
