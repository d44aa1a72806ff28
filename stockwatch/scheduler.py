"""
Scheduled critical stock sweep.

The sweep is triggered from outside the HTTP handlers: a job POSTs to
``/monitor-products`` on a crontab schedule (hourly by default). It runs in
the separate ``stockwatch cron`` process, or inside the service itself when
MONITOR_SCHEDULE_ENABLED is true.
"""

import logging
from datetime import datetime
from typing import Optional

import httpx
from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from stockwatch.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

MONITOR_JOB_ID = "monitor_products"

# Global scheduler instance
scheduler: Optional[AsyncIOScheduler] = None


async def monitor_products_task(settings: Optional[Settings] = None) -> Optional[dict]:
    """Ask the service to sweep every tenant. Never raises."""
    settings = settings or get_settings()
    url = f"{settings.SERVICE_URL.rstrip('/')}/monitor-products"
    logger.info(f"Triggering critical stock sweep at {url}")

    try:
        async with httpx.AsyncClient(timeout=300.0) as client:
            response = await client.post(url)
    except httpx.HTTPError as e:
        logger.error(f"Could not reach {url}: {e}")
        return None

    if response.status_code != 200:
        logger.error(f"Sweep request failed with status {response.status_code}: {response.text}")
        return None

    result = response.json()
    if result.get("success"):
        logger.info(f"Sweep completed: {result.get('message')}")
    else:
        logger.warning(f"Sweep not run: {result.get('message')} ({result.get('hint', 'no hint')})")
    return result


def job_listener(event):
    """Listen to job events for logging"""
    if event.exception:
        logger.error(f"Job {event.job_id} crashed: {event.exception}")
    else:
        logger.info(f"Job {event.job_id} executed successfully at {datetime.now()}")


def create_scheduler(settings: Optional[Settings] = None) -> AsyncIOScheduler:
    """Create and configure the scheduler"""
    global scheduler

    if scheduler is not None:
        return scheduler

    settings = settings or get_settings()
    scheduler = AsyncIOScheduler()
    scheduler.add_listener(job_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)

    scheduler.add_job(
        monitor_products_task,
        CronTrigger.from_crontab(settings.MONITOR_SCHEDULE),
        kwargs={"settings": settings},
        id=MONITOR_JOB_ID,
        name="Monitor Critical Stock",
        replace_existing=True,
        max_instances=1,  # Only one sweep at a time
        misfire_grace_time=600
    )
    logger.info(f"Critical stock sweep scheduled with: {settings.MONITOR_SCHEDULE}")
    return scheduler


async def start_scheduler(settings: Optional[Settings] = None):
    """Start the scheduler"""
    global scheduler

    if scheduler is None:
        scheduler = create_scheduler(settings)

    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started successfully")
        for job in scheduler.get_jobs():
            logger.info(f"  - {job.name}: {job.trigger}")


async def stop_scheduler():
    """Stop the scheduler gracefully"""
    global scheduler

    if scheduler and scheduler.running:
        scheduler.shutdown(wait=True)
        logger.info("Scheduler stopped successfully")
    scheduler = None


async def get_scheduler_status():
    """Get current scheduler status and job information"""
    if scheduler is None:
        return {"status": "not_initialized", "jobs": []}

    jobs_info = []
    for job in scheduler.get_jobs():
        next_run = getattr(job, "next_run_time", None)
        jobs_info.append({
            "id": job.id,
            "name": job.name,
            "next_run": next_run.isoformat() if next_run else None,
            "trigger": str(job.trigger)
        })

    return {
        "status": "running" if scheduler.running else "stopped",
        "jobs": jobs_info
    }
