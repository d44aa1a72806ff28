# stockwatch/cli/main.py
import asyncio
import json
import logging

import click

from stockwatch.core.config import get_settings
from stockwatch.core.exceptions import ConfigurationError, ProductNotFoundError
from stockwatch.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _print_result(result):
    click.echo(json.dumps({
        "trigger": result.trigger.value,
        "tenantsChecked": result.tenants_checked,
        "criticalProducts": result.critical_products,
        "emailsSent": result.emails_sent,
        "emailsFailed": result.emails_failed,
        "errors": result.errors,
    }, indent=2))


async def _run_with_monitor(action):
    from stockwatch.main import build_stock_monitor

    monitor, engine = build_stock_monitor(get_settings())
    try:
        return await action(monitor)
    finally:
        if engine is not None:
            await engine.dispose()


@click.group()
@click.option('--log-level', default=None, help='Override LOG_LEVEL')
def cli(log_level):
    """Critical stock notifications for suppliers"""
    configure_logging(log_level)


@cli.command()
@click.option('--host', default='0.0.0.0')
@click.option('--port', default=8000, type=int, envvar='PORT')
def serve(host, port):
    """Run the HTTP service"""
    import uvicorn

    uvicorn.run("stockwatch.main:app", host=host, port=port, log_level="info")


@cli.command()
def sweep():
    """Run one critical stock sweep over every tenant"""
    try:
        result = asyncio.run(_run_with_monitor(lambda monitor: monitor.sweep_all()))
    except ConfigurationError as e:
        raise click.ClickException(f"{e} ({e.hint})")
    _print_result(result)


@cli.command()
@click.argument('tenant_id')
@click.argument('product_id')
def check(tenant_id, product_id):
    """Check one product and alert its suppliers if it is critical"""
    try:
        result = asyncio.run(_run_with_monitor(lambda monitor: monitor.check_product(tenant_id, product_id)))
    except ConfigurationError as e:
        raise click.ClickException(f"{e} ({e.hint})")
    except ProductNotFoundError as e:
        raise click.ClickException(str(e))
    _print_result(result)


@cli.command()
@click.option('--once', is_flag=True, help='Trigger a single sweep and exit')
def cron(once):
    """Trigger POST /monitor-products on MONITOR_SCHEDULE (hourly by default)"""
    from stockwatch.scheduler import create_scheduler, monitor_products_task

    settings = get_settings()
    if once:
        asyncio.run(monitor_products_task(settings))
        return

    async def _forever():
        scheduler = create_scheduler(settings)
        scheduler.start()
        click.echo(f"Scheduler running against {settings.SERVICE_URL} ({settings.MONITOR_SCHEDULE}). Press Ctrl+C to stop.")
        try:
            await asyncio.Event().wait()
        finally:
            scheduler.shutdown(wait=False)

    try:
        asyncio.run(_forever())
    except KeyboardInterrupt:
        click.echo("Scheduler stopped")


if __name__ == "__main__":
    cli()
