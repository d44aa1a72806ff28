"""
Shared enums used across the notification core.
"""

from enum import Enum


class StockLevel(str, Enum):
    """Derived classification of a product's quantity"""
    CRITICAL = "CRITICAL"
    NORMAL = "NORMAL"


class TriggerSource(str, Enum):
    """Entry point that started a monitoring run"""
    REACTIVE = "reactive"                  # product document written
    SWEEP = "sweep"                        # scheduled scan of every tenant
    ON_DEMAND = "on_demand"                # single product check
    SUPPLIER_ENABLED = "supplier_enabled"  # supplier switched autoEmail on


class AlertType(str, Enum):
    LOW_STOCK = "low_stock"
    EXPIRING = "expiring"
