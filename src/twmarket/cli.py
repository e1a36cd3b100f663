"""twmarket command line interface."""

from __future__ import annotations

import asyncio
from datetime import date, datetime
from typing import Callable, Optional

import typer
from rich.console import Console

from twmarket.core.config import get_config
from twmarket.core.errors import TwMarketError
from twmarket.core.logging import configure_logging, get_logger
from twmarket.scrapers import SCRAPERS, BaseScraper, TwseScraper
from twmarket.utils.metrics import start_metrics_server

# Main CLI app
app = typer.Typer(
    name="twmarket",
    help="twmarket CLI: daily market activity reports from TWSE, TPEx and TAIFEX",
    no_args_is_help=True,
    add_completion=False,
)

# Command groups
twse_app = typer.Typer(name="twse", help="TWSE (main board) reports", no_args_is_help=True)
tpex_app = typer.Typer(name="tpex", help="TPEx (OTC board) reports", no_args_is_help=True)
taifex_app = typer.Typer(
    name="taifex", help="TAIFEX (derivatives exchange) reports", no_args_is_help=True
)

app.add_typer(twse_app, name="twse")
app.add_typer(tpex_app, name="tpex")
app.add_typer(taifex_app, name="taifex")

console = Console()
logger = get_logger(__name__)


def validate_date_format(date_str: str, allow_future: bool = False) -> date:
    """Validate date format and return date object.

    Supports multiple formats:
    - YYYY-MM-DD (ISO format)
    - YYYYMMDD (compact format)

    Args:
        date_str: Date string to validate
        allow_future: If False, reject dates in the future (default: False)

    Raises:
        typer.Exit: If date format is invalid or date is in future when not allowed
    """
    parsed_date = None

    try:
        parsed_date = date.fromisoformat(date_str)
    except ValueError:
        try:
            if len(date_str) == 8 and date_str.isdigit():
                parsed_date = datetime.strptime(date_str, "%Y%m%d").date()
        except ValueError:
            pass

    if parsed_date is None:
        typer.secho(
            f"Invalid date format: {date_str}. Use YYYY-MM-DD or YYYYMMDD",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(1) from None

    if not allow_future and parsed_date > date.today():
        typer.secho(
            f"Date {parsed_date} is in the future. Reports exist only for past sessions.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(1)

    return parsed_date


def run_report(scraper_cls: type[BaseScraper], report: str, date_str: Optional[str]) -> None:
    """Fetch one report and print it as JSON."""
    target_date = validate_date_format(date_str) if date_str else date.today()

    async def fetch():
        async with scraper_cls() as scraper:
            return await scraper.fetch(report, target_date)

    try:
        record = asyncio.run(fetch())
    except TwMarketError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from e

    if record is None:
        typer.secho(
            f"No {scraper_cls.PROVIDER} {report} data published for {target_date}",
            fg=typer.colors.YELLOW,
            err=True,
        )
        return

    console.print_json(data=record.to_dict())


def _report_command(scraper_cls: type[BaseScraper], report: str) -> Callable[..., None]:
    def command(
        date_str: Optional[str] = typer.Option(
            None, "--date", "-d", help="Trade date (YYYY-MM-DD or YYYYMMDD), default today"
        ),
    ) -> None:
        run_report(scraper_cls, report, date_str)

    command.__doc__ = f"Fetch {scraper_cls.PROVIDER.upper()} {report.replace('_', ' ')}."
    return command


_GROUPS = {"twse": twse_app, "tpex": tpex_app, "taifex": taifex_app}

for _provider, _scraper_cls in SCRAPERS.items():
    _group = _GROUPS[_provider]
    for _report in _scraper_cls.report_names():
        _group.command(_report.replace("_", "-"))(_report_command(_scraper_cls, _report))


@twse_app.command("listed")
def twse_listed(
    market: str = typer.Option("TSE", "--market", "-m", help="TSE (main board) or OTC"),
) -> None:
    """List instruments on the main or OTC board."""

    async def fetch():
        async with TwseScraper() as scraper:
            return await scraper.fetch_listed_instruments(market)

    try:
        instruments = asyncio.run(fetch())
    except TwMarketError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from e

    console.print_json(data=[instrument.to_dict() for instrument in instruments])


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json or console"),
    metrics_port: Optional[int] = typer.Option(
        None, "--metrics-port", help="Expose Prometheus metrics on this port"
    ),
) -> None:
    """Configure logging (and optionally metrics) before any command runs."""
    logging_config = get_config().logging
    try:
        configure_logging(log_level or logging_config.level, log_format or logging_config.format)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from e

    if metrics_port is not None:
        start_metrics_server(metrics_port)
        logger.info("Metrics server started", port=metrics_port)
