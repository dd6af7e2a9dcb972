"""Stock widget configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from stockwidget.symbols import normalize_symbol

DEFAULT_WATCHLIST = ("AAPL", "MSFT", "AMZN", "GOOGL", "META")


class ProviderType(Enum):
    """Supported data provider backends."""

    ALPHAVANTAGE = "alphavantage"
    FINNHUB = "finnhub"
    MOCK = "mock"


@dataclass
class WidgetConfig:
    """Configuration for StockWidget.

    Attributes:
        provider: Market data backend serving quotes and daily history.
        watchlist: Symbols cycled through by the ticker bar, in display order.
        quote_ttl_seconds: Age at which a cached quote goes stale; also the
            ticker cooldown between two full passes.
        ticker_delay_seconds: Pause between two ticker requests. Keeps the
            ticker under the provider's per-minute quota (12s -> 5/min).
        history_days: Number of daily closes plotted by the chart.
        request_timeout: HTTP timeout in seconds (None = transport default).
        chart_path: Where to save the rendered chart image, if anywhere.
        alphavantage_api_key: Alpha Vantage API key.
        finnhub_api_key: Finnhub API key.
    """

    provider: ProviderType = ProviderType.ALPHAVANTAGE
    watchlist: list[str] = field(default_factory=lambda: list(DEFAULT_WATCHLIST))
    quote_ttl_seconds: float = 600.0
    ticker_delay_seconds: float = 12.0
    history_days: int = 30
    request_timeout: float | None = None
    chart_path: str | None = None

    alphavantage_api_key: str | None = None
    finnhub_api_key: str | None = None

    def __post_init__(self) -> None:
        self.watchlist = [
            s for s in (normalize_symbol(s) for s in self.watchlist) if s
        ]
