# tests/unit/test_cli.py
import json

from click.testing import CliRunner

from stockwatch.cli import main as cli_main
from stockwatch.services.monitor_service import StockMonitor


def _patch_monitor(mocker, monitor):
    mocker.patch("stockwatch.main.build_stock_monitor", return_value=(monitor, None))


def test_sweep_prints_summary(mocker, monitor, seeded_store, transport):
    seeded_store.set_quantity("T", "P1", 1)
    _patch_monitor(mocker, monitor)

    result = CliRunner().invoke(cli_main.cli, ["sweep"])

    assert result.exit_code == 0, result.output
    summary = json.loads(result.output)
    assert summary["emailsSent"] == 1
    assert summary["trigger"] == "sweep"


def test_check_unknown_product_fails(mocker, monitor, seeded_store):
    _patch_monitor(mocker, monitor)

    result = CliRunner().invoke(cli_main.cli, ["check", "T", "missing"])

    assert result.exit_code != 0
    assert "not found" in result.output


def test_sweep_without_store_fails_cleanly(mocker, settings, notifier):
    _patch_monitor(mocker, StockMonitor.from_settings(settings, store=None, notifier=notifier))

    result = CliRunner().invoke(cli_main.cli, ["sweep"])

    assert result.exit_code == 1
    assert "Data store is not configured" in result.output


def test_cron_once_triggers_single_sweep(mocker):
    task = mocker.patch("stockwatch.scheduler.monitor_products_task", new=mocker.AsyncMock(return_value={}))

    result = CliRunner().invoke(cli_main.cli, ["cron", "--once"])

    assert result.exit_code == 0, result.output
    task.assert_awaited_once()
