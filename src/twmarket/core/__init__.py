"""Core infrastructure: configuration, errors and logging."""

from .config import AppConfig, get_config, reload_config
from .errors import (
    ConfigError,
    DecodeError,
    ParseError,
    TransportError,
    TwMarketError,
)
from .logging import (
    configure_logging,
    get_logger,
    get_trace_id,
    trace_scope,
)

__all__ = [
    # Config
    "AppConfig",
    "get_config",
    "reload_config",
    # Errors
    "TwMarketError",
    "DecodeError",
    "ParseError",
    "TransportError",
    "ConfigError",
    # Logging
    "get_logger",
    "configure_logging",
    "get_trace_id",
    "trace_scope",
]
