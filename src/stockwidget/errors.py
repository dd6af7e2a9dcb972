"""Stock widget error types."""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Error classification codes."""

    RATE_LIMITED = "rate_limited"
    INVALID_SYMBOL = "invalid_symbol"
    NETWORK_ERROR = "network_error"
    NO_HISTORY_DATA = "no_history_data"
    EMPTY_INPUT = "empty_input"
    CONFIG_ERROR = "config_error"


class StockWidgetError(Exception):
    """Widget exception carrying a structured error code.

    Providers raise it for every failed request; the fetcher turns it into a
    quote or history status so nothing but ``CONFIG_ERROR`` ever reaches the
    display layer as an exception.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.NETWORK_ERROR,
    ) -> None:
        super().__init__(message)
        self.code = code
