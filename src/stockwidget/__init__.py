"""stockwidget: ticker bar, symbol search and price chart over a quote API.

Alpha Vantage or Finnhub backends, a TTL quote cache shared by the ticker
and the search, and a throttled ticker refresh loop.

Quick start::

    from stockwidget import create_widget_from_env
    widget = create_widget_from_env()
    view = widget.search("AAPL")
    print(view.text)
"""

from __future__ import annotations

import os

from stockwidget.cache import QuoteCache
from stockwidget.chart import ChartRenderer
from stockwidget.config import DEFAULT_WATCHLIST, ProviderType, WidgetConfig
from stockwidget.errors import ErrorCode, StockWidgetError
from stockwidget.fetcher import QuoteFetcher
from stockwidget.models.history import HistoryPoint, HistoryResult, HistoryStatus
from stockwidget.models.quote import PLACEHOLDER, Quote, QuoteStatus
from stockwidget.providers import resolve_provider_type
from stockwidget.search import SearchFlow, SearchView
from stockwidget.symbols import normalize_symbol
from stockwidget.ticker import TickerCycle, TickerHandle, format_ticker_fragment
from stockwidget.widget import StockWidget

__version__ = "0.1.0"

__all__ = [
    # Widget
    "StockWidget",
    "create_widget_from_env",
    "config_from_env",
    # Components
    "QuoteCache",
    "QuoteFetcher",
    "TickerCycle",
    "TickerHandle",
    "format_ticker_fragment",
    "SearchFlow",
    "SearchView",
    "ChartRenderer",
    "normalize_symbol",
    # Config
    "WidgetConfig",
    "ProviderType",
    "DEFAULT_WATCHLIST",
    # Errors
    "StockWidgetError",
    "ErrorCode",
    # Models
    "Quote",
    "QuoteStatus",
    "PLACEHOLDER",
    "HistoryPoint",
    "HistoryResult",
    "HistoryStatus",
]


def config_from_env() -> WidgetConfig:
    """Build a WidgetConfig from environment variables.

    Environment variables:
        STOCKWIDGET_PROVIDER: "alphavantage", "finnhub" or "mock" (default: "alphavantage").
        STOCKWIDGET_WATCHLIST: Comma-separated ticker symbols.
        STOCKWIDGET_QUOTE_TTL: Quote cache TTL / ticker cooldown in seconds (default: 600).
        STOCKWIDGET_TICKER_DELAY: Seconds between ticker requests (default: 12).
        STOCKWIDGET_HISTORY_DAYS: Daily closes plotted (default: 30).
        STOCKWIDGET_REQUEST_TIMEOUT: HTTP timeout in seconds (default: none).
        STOCKWIDGET_CHART_PATH: Save the chart image here after each search.
        ALPHAVANTAGE_API_KEY: Alpha Vantage API key.
        FINNHUB_API_KEY: Finnhub API key.
    """
    provider = resolve_provider_type(os.getenv("STOCKWIDGET_PROVIDER", "alphavantage"))

    watchlist_str = os.getenv("STOCKWIDGET_WATCHLIST")
    watchlist = (
        [name for name in watchlist_str.split(",") if name.strip()]
        if watchlist_str
        else list(DEFAULT_WATCHLIST)
    )
    timeout = os.getenv("STOCKWIDGET_REQUEST_TIMEOUT")

    try:
        return WidgetConfig(
            provider=provider,
            watchlist=watchlist,
            quote_ttl_seconds=float(os.getenv("STOCKWIDGET_QUOTE_TTL", "600")),
            ticker_delay_seconds=float(os.getenv("STOCKWIDGET_TICKER_DELAY", "12")),
            history_days=int(os.getenv("STOCKWIDGET_HISTORY_DAYS", "30")),
            request_timeout=float(timeout) if timeout else None,
            chart_path=os.getenv("STOCKWIDGET_CHART_PATH") or None,
            alphavantage_api_key=os.getenv("ALPHAVANTAGE_API_KEY"),
            finnhub_api_key=os.getenv("FINNHUB_API_KEY"),
        )
    except ValueError as exc:
        raise StockWidgetError(
            f"Invalid numeric setting: {exc}",
            code=ErrorCode.CONFIG_ERROR,
        ) from exc


def create_widget_from_env() -> StockWidget:
    """Zero-config factory. Reads provider, watchlist and API keys from env vars."""
    return StockWidget(config_from_env())
