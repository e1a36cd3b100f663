"""Unified application configuration with environment support.

Configuration hierarchy:
    1. Environment variables (highest priority)
    2. .env file
    3. Built-in defaults
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ============================================================================
# Data Source Configuration
# ============================================================================


class TWSEConfig(BaseSettings):
    """TWSE (Taiwan Stock Exchange) data source configuration."""

    market_trades_url: str = Field(
        default="https://www.twse.com.tw/rwd/zh/afterTrading/FMTQIK",
        description="Daily market trading volume/value report",
    )
    market_breadth_url: str = Field(
        default="https://www.twse.com.tw/rwd/zh/afterTrading/MI_INDEX",
        description="Daily closing summary (advance/decline tables)",
    )
    inst_investors_trades_url: str = Field(
        default="https://www.twse.com.tw/rwd/zh/fund/BFI82U",
        description="Institutional investors net buy/sell summary",
    )
    margin_transactions_url: str = Field(
        default="https://www.twse.com.tw/rwd/zh/marginTrading/MI_MARGN",
        description="Margin trading summary",
    )
    listed_instruments_url: str = Field(
        default="https://isin.twse.com.tw/isin/class_main.jsp",
        description="ISIN listing pages for listed and OTC securities",
    )

    model_config = SettingsConfigDict(env_prefix="TWSE_", extra="allow")


class TPExConfig(BaseSettings):
    """TPEx (Taipei Exchange, OTC board) data source configuration."""

    market_trades_url: str = Field(
        default="https://www.tpex.org.tw/web/stock/aftertrading/daily_trading_index/st41_result.php",
        description="Daily OTC trading index report",
    )
    market_breadth_url: str = Field(
        default="https://www.tpex.org.tw/web/stock/aftertrading/market_highlight/highlight_result.php",
        description="Daily OTC market highlight",
    )
    inst_investors_trades_url: str = Field(
        default="https://www.tpex.org.tw/web/stock/3insti/3insti_summary/3itridsum_result.php",
        description="OTC institutional investors summary",
    )
    margin_transactions_url: str = Field(
        default="https://www.tpex.org.tw/web/stock/margin_trading/margin_balance/margin_bal_result.php",
        description="OTC margin balance report",
    )

    model_config = SettingsConfigDict(env_prefix="TPEX_", extra="allow")


class TAIFEXConfig(BaseSettings):
    """TAIFEX (Taiwan Futures Exchange) data source configuration."""

    fut_contracts_url: str = Field(
        default="https://www.taifex.com.tw/cht/3/futContractsDateDown",
        description="Futures open interest by investor class (CSV download)",
    )
    calls_and_puts_url: str = Field(
        default="https://www.taifex.com.tw/cht/3/callsAndPutsDateDown",
        description="Options calls/puts open interest by investor class (CSV download)",
    )
    fut_data_url: str = Field(
        default="https://www.taifex.com.tw/cht/3/futDataDown",
        description="Futures daily market data (CSV download)",
    )
    large_traders_url: str = Field(
        default="https://www.taifex.com.tw/cht/3/largeTraderFutDown",
        description="Large traders futures positions (CSV download)",
    )
    lookback_years: int = Field(
        default=3,
        ge=1,
        description="Years subtracted from the target date for the query window start",
    )

    model_config = SettingsConfigDict(env_prefix="TAIFEX_", extra="allow")


# ============================================================================
# Scraper Configuration
# ============================================================================


class ScraperConfig(BaseSettings):
    """HTTP scraper behavior configuration."""

    timeout: int = Field(
        default=30,
        ge=1,
        description="HTTP request timeout in seconds",
    )
    user_agent: str = Field(
        default="Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36",
        description="HTTP User-Agent header",
    )
    legacy_encoding: str = Field(
        default="cp950",
        description="Codec for Big5-encoded payloads (ISIN pages, TAIFEX CSV)",
    )

    @field_validator("legacy_encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject codec names Python does not know."""
        import codecs

        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown codec: {v}") from e
        return v

    model_config = SettingsConfigDict(env_prefix="SCRAPER_", extra="allow")


# ============================================================================
# Observability Configuration
# ============================================================================


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    format: str = Field(
        default="json",
        description="Log format (json, console)",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    model_config = SettingsConfigDict(env_prefix="LOG_", extra="allow")


# ============================================================================
# Unified Application Configuration
# ============================================================================


class AppConfig(BaseSettings):
    """Master configuration.

    All sub-configurations are included here for easy access:
        config.twse.market_trades_url
        config.taifex.large_traders_url
        config.scraper.legacy_encoding
        etc.
    """

    twse: TWSEConfig = Field(default_factory=TWSEConfig)
    tpex: TPExConfig = Field(default_factory=TPExConfig)
    taifex: TAIFEXConfig = Field(default_factory=TAIFEXConfig)

    scraper: ScraperConfig = Field(default_factory=ScraperConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global application configuration.

    Returns:
        AppConfig instance
    """
    return config


def reload_config() -> AppConfig:
    """Reload configuration from environment.

    Useful for testing or dynamic configuration changes.

    Returns:
        New AppConfig instance
    """
    global config
    config = AppConfig()
    return config
