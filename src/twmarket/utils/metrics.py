"""Prometheus metrics for monitoring."""

from prometheus_client import Counter, Histogram, start_http_server

reports_fetched = Counter(
    "twmarket_reports_fetched_total",
    "Total report fetches by outcome (present, absent, error)",
    ["provider", "report", "outcome"],
)

report_fetch_duration = Histogram(
    "twmarket_report_fetch_duration_seconds",
    "Time spent fetching and extracting a report",
    ["provider", "report"],
)


def start_metrics_server(port: int = 9090) -> None:
    """Start Prometheus metrics HTTP server.

    Args:
        port: Port to expose metrics on
    """
    start_http_server(port)
