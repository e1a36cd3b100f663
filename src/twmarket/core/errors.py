"""Error hierarchy for report retrieval and normalization.

"No data published for this date" is not an error: extractors and
orchestrators return ``None`` for it. Everything below is a real failure.
"""

from __future__ import annotations

from typing import Any, Optional


class TwMarketError(Exception):
    """Base exception for all twmarket errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for logging/monitoring
        retryable: Whether operation can be safely retried
        recovery_hint: Suggested recovery action
        context: Where the failure happened (provider, report, date)
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        retryable: bool = False,
        recovery_hint: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.retryable = retryable
        self.recovery_hint = recovery_hint
        self.context: dict[str, Any] = dict(context or {})
        super().__init__(message)

    def with_context(self, **context: Any) -> "TwMarketError":
        """Attach location details without overwriting ones already set."""
        for key, value in context.items():
            self.context.setdefault(key, value)
        return self

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.context:
            details = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base += f" <{details}>"
        if self.recovery_hint:
            base += f" ({self.recovery_hint})"
        return base


class DecodeError(TwMarketError):
    """Raised when a payload cannot be decoded.

    Examples:
        - Bytes invalid for the legacy codec
        - CSV text that polars cannot tokenize
        - A JSON endpoint answering with a non-JSON body
    """

    def __init__(
        self,
        message: str,
        recovery_hint: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            code="DECODE_ERROR",
            retryable=False,
            recovery_hint=recovery_hint or "Inspect the raw payload and its encoding",
            context=context,
        )


class ParseError(TwMarketError):
    """Raised when a cell at a known layout offset is not what it should be.

    A numeric cell that does not parse, or a row/column that is missing,
    means the provider layout has drifted from the offsets we read.
    """

    def __init__(
        self,
        message: str,
        value: Any = None,
        recovery_hint: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            code="PARSE_ERROR",
            retryable=False,
            recovery_hint=recovery_hint or "Check report layout offsets against the provider",
            context=context,
        )
        self.value = value


class TransportError(TwMarketError):
    """Raised on network or HTTP failures talking to a provider."""

    def __init__(
        self,
        service: str,
        message: str,
        status_code: Optional[int] = None,
        recovery_hint: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            f"{service}: {message}",
            code="TRANSPORT_ERROR",
            retryable=True,
            recovery_hint=recovery_hint or f"Check {service} connectivity",
            context=context,
        )
        self.service = service
        self.status_code = status_code


class ConfigError(TwMarketError):
    """Raised on configuration or argument errors."""

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        super().__init__(
            message,
            code="CONFIG_ERROR",
            retryable=False,
            recovery_hint=recovery_hint or "Check environment variables and arguments",
        )
