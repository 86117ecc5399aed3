"""Command line entry point for deinflation."""

from __future__ import annotations

import json
from pathlib import Path

import click
import structlog

from deinflation import build_adjuster
from deinflation.adjust import Adjuster
from deinflation.config import API_KEY_ENV, CACHE_PATH_ENV, Settings
from deinflation.errors import DeinflationError
from deinflation.logging import configure_logging
from deinflation.output.utils import format_percent

LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")

SELF_TEST_EXPECTED = "$251.32"

logger = structlog.get_logger(__name__)


def _adjuster(ctx: click.Context) -> Adjuster:
    """Build the adjuster lazily so ``--help`` never touches the cache or network."""
    ctx.ensure_object(dict)
    if "adjuster" not in ctx.obj:
        ctx.obj["adjuster"] = build_adjuster(ctx.obj["settings"])
    return ctx.obj["adjuster"]


@click.group()
@click.option(
    "--cache-path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=CACHE_PATH_ENV,
    default=None,
    help="Location of the JSON CPI cache. Defaults to ./inflation-data.json.",
)
@click.option(
    "--api-key",
    envvar=API_KEY_ENV,
    default=None,
    help="BLS API registration key. Only needed when the cache must be refreshed.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar="DEINFLATION_LOG_LEVEL",
    default="warning",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar="DEINFLATION_LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    cache_path: Path | None,
    api_key: str | None,
    log_level: str,
    log_format: str,
) -> None:
    """Adjust dollar amounts for inflation with BLS CPI-U data."""
    configure_logging(level=log_level, json_output=log_format.lower() == "json")
    ctx.ensure_object(dict)
    settings = Settings.from_env(cache_path=cache_path, api_key=api_key)
    ctx.obj["settings"] = settings
    logger.debug(
        "cli.initialized",
        cache_path=str(settings.cache_path),
        api_key=bool(settings.api_key),
        log_level=log_level.lower(),
    )


@cli.command("adjust")
@click.argument("value")
@click.argument("date_a")
@click.argument("date_b", required=False)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full report as JSON.")
@click.pass_context
def adjust_command(
    ctx: click.Context,
    *,
    value: str,
    date_a: str,
    date_b: str | None,
    as_json: bool,
) -> None:
    """Express VALUE at DATE_A prices in DATE_B prices (default: the latest data)."""
    try:
        report = _adjuster(ctx).adjust(value, date_a, date_b)
    except DeinflationError as exc:
        raise click.ClickException(str(exc)) from exc
    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return
    click.echo(
        f"{report.money} ({report.kind}, {report.money_diff} from "
        f"{report.date_a} to {report.date_b}, {format_percent(report.percent)})"
    )
    for notice in report.notices:
        click.echo(f"note: {notice}", err=True)


@cli.command("last-updated")
@click.pass_context
def last_updated(ctx: click.Context) -> None:
    """Print the newest month available in the CPI data."""
    try:
        click.echo(_adjuster(ctx).data_last_updated())
    except DeinflationError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command("self-test")
@click.pass_context
def self_test(ctx: click.Context) -> None:
    """Check the data source with a known historical adjustment."""
    cmd_log = logger.bind(command="self-test")
    cmd_log.info("command.start")
    try:
        money = _adjuster(ctx).adjust(199.99, "10/1985", "8/1991").money
    except DeinflationError as exc:
        raise click.ClickException(f"Self test could not run: {exc}") from exc
    click.echo(
        f"An NES was $199.99 when released in October 1985, that's like {money} "
        "when the SNES came out in August 1991."
    )
    if money != SELF_TEST_EXPECTED:
        cmd_log.error("command.self_test_failed", expected=SELF_TEST_EXPECTED, actual=money)
        raise click.ClickException(f"Expected {SELF_TEST_EXPECTED}, got {money}.")
    click.echo("deinflation appears to be working correctly.")
    cmd_log.info("command.completed")


def main() -> None:
    cli(obj={})


__all__ = ["cli", "main"]
