"""
Scheduler status endpoint
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter

from stockwatch.scheduler import get_scheduler_status

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/scheduler", tags=["scheduler"])


@router.get("/status", response_model=Dict[str, Any])
async def scheduler_status():
    """Get current scheduler status and configured jobs"""
    return await get_scheduler_status()
