from fastapi import Request

from stockwatch.services.monitor_service import StockMonitor


def get_stock_monitor(request: Request) -> StockMonitor:
    """The process-wide monitor built in the application lifespan."""
    return request.app.state.stock_monitor
