# stockwatch/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from stockwatch import __version__
from stockwatch.core.config import Settings, get_settings
from stockwatch.core.logging_config import configure_logging
from stockwatch.database import create_engine, create_session_factory
from stockwatch.routes import health, monitor, scheduler as scheduler_routes, tenants, webhooks
from stockwatch.scheduler import start_scheduler, stop_scheduler
from stockwatch.services.inventory_store import SQLAlchemyInventoryStore
from stockwatch.services.monitor_service import StockMonitor
from stockwatch.services.notification_service import EmailNotificationService

logger = logging.getLogger(__name__)


def build_stock_monitor(settings: Settings):
    """Wire store, notifier and classifier. Returns (monitor, engine)."""
    engine = create_engine(settings)
    if engine is None:
        logger.warning("DATABASE_URL is not set; running in degraded mode without a data store")
        store = None
    else:
        store = SQLAlchemyInventoryStore(create_session_factory(engine))
        logger.info("Inventory store initialised")

    notifier = EmailNotificationService(settings)
    if not notifier.is_configured:
        logger.warning("SMTP settings incomplete; critical stock alerts cannot be sent")

    return StockMonitor.from_settings(settings, store=store, notifier=notifier), engine


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        monitor_, engine = build_stock_monitor(settings)
        app.state.stock_monitor = monitor_

        if settings.MONITOR_SCHEDULE_ENABLED:
            await start_scheduler(settings)
        else:
            logger.info("In-process sweep schedule disabled; use `stockwatch cron` or set MONITOR_SCHEDULE_ENABLED=true")

        try:
            yield  # This is where the app runs
        finally:
            await stop_scheduler()
            if engine is not None:
                await engine.dispose()

    app = FastAPI(
        title="Stockwatch",
        description="Critical stock notifications for suppliers",
        version=__version__,
        lifespan=lifespan
    )

    app.include_router(health.router)
    app.include_router(monitor.router)
    app.include_router(webhooks.router)
    app.include_router(tenants.router)
    app.include_router(scheduler_routes.router)
    return app


configure_logging()
app = create_app()
