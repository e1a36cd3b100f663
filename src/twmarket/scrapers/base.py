"""Base scraper class."""

from __future__ import annotations

from datetime import date
from typing import Any, Awaitable, Callable, ClassVar, Optional, TypeVar

from twmarket.core.config import AppConfig, get_config
from twmarket.core.errors import ConfigError, TwMarketError
from twmarket.core.logging import get_logger, trace_scope
from twmarket.parsers.decoding import decode
from twmarket.scrapers.transport import HttpTransport
from twmarket.utils.calendar import resolve_target_date
from twmarket.utils.metrics import report_fetch_duration, reports_fetched

T = TypeVar("T")


class BaseScraper:
    """Base class for provider scrapers.

    Subclasses list their report identities in ``REPORTS`` (report name ->
    coroutine method name) and implement one ``fetch_*`` method per report.
    Every method returns a record, or None when the provider has not
    published data for the date.
    """

    PROVIDER: ClassVar[str] = ""
    REPORTS: ClassVar[dict[str, str]] = {}

    def __init__(
        self,
        transport: Optional[HttpTransport] = None,
        config: Optional[AppConfig] = None,
    ) -> None:
        """Initialize scraper.

        Args:
            transport: HTTP transport; a default one is created if omitted
            config: Application config; the global one is used if omitted
        """
        self.config = config or get_config()
        self.transport = transport or HttpTransport(
            self.PROVIDER,
            timeout=self.config.scraper.timeout,
            user_agent=self.config.scraper.user_agent,
        )
        self.logger = get_logger(f"{__name__}.{self.PROVIDER}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    @classmethod
    def report_names(cls) -> list[str]:
        """Report identities this provider serves."""
        return list(cls.REPORTS)

    async def fetch(self, report: str, target_date: date | str | None = None) -> Any:
        """Dispatch to the fetch method registered for ``report``.

        Raises:
            ConfigError: If the provider has no such report
        """
        method_name = self.REPORTS.get(report)
        if method_name is None:
            raise ConfigError(
                f"Unknown {self.PROVIDER} report {report!r}",
                recovery_hint=f"Use one of: {', '.join(self.REPORTS)}",
            )
        return await getattr(self, method_name)(target_date)

    def decode_legacy(self, payload: bytes) -> str:
        """Decode a Big5-family payload with the configured codec."""
        return decode(payload, self.config.scraper.legacy_encoding)

    async def run_report(
        self,
        report: str,
        target_date: date | str | None,
        produce: Callable[[date], Awaitable[Optional[T]]],
    ) -> Optional[T]:
        """Run one report fetch with logging, metrics and error context.

        Args:
            report: Report identity
            target_date: Requested date (None means today)
            produce: Coroutine doing fetch + decode + extract for the date

        Returns:
            The record, or None if no data is published for the date
        """
        resolved = resolve_target_date(target_date)

        # Constituent reports of a composite share the outer trace id
        with trace_scope() as trace_id:
            log = self.logger.bind(report=report, date=resolved.isoformat(), trace_id=trace_id)

            with report_fetch_duration.labels(provider=self.PROVIDER, report=report).time():
                log.info("Fetching report")
                try:
                    record = await produce(resolved)
                except TwMarketError as e:
                    e.with_context(
                        provider=self.PROVIDER, report=report, date=resolved.isoformat()
                    )
                    reports_fetched.labels(
                        provider=self.PROVIDER, report=report, outcome="error"
                    ).inc()
                    log.error("Report fetch failed", error=str(e), code=e.code)
                    raise

        outcome = "absent" if record is None else "present"
        reports_fetched.labels(provider=self.PROVIDER, report=report, outcome=outcome).inc()
        if record is None:
            log.info("No data published for date")
        else:
            log.info("Report fetched")
        return record
