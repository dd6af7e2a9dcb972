"""StockWidget wires provider, cache, ticker, search and chart together."""

from __future__ import annotations

import time
from typing import Any, Callable

from stockwidget.cache import QuoteCache
from stockwidget.chart import ChartRenderer
from stockwidget.config import ProviderType, WidgetConfig
from stockwidget.fetcher import QuoteFetcher
from stockwidget.providers import create_provider
from stockwidget.providers.base import BaseQuoteProvider
from stockwidget.search import SearchFlow, SearchView
from stockwidget.ticker import TickerCycle, TickerHandle


class StockWidget:
    """Ticker bar + search box + chart over one shared quote cache.

    Usage::

        from stockwidget import create_widget_from_env
        widget = create_widget_from_env()
        handle = widget.start_ticker()
        view = widget.search("aapl")
        handle.cancel()
    """

    def __init__(
        self,
        config: WidgetConfig,
        provider: BaseQuoteProvider | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], object] | None = None,
        on_ticker_update: Callable[[str], None] | None = None,
        on_search_update: Callable[[SearchView], None] | None = None,
    ) -> None:
        self.config = config
        self.provider = provider or self._build_provider(config)

        self.cache = QuoteCache(ttl_seconds=config.quote_ttl_seconds, clock=clock)
        self.fetcher = QuoteFetcher(
            self.provider,
            self.cache,
            clock=clock,
            history_days=config.history_days,
        )
        self.chart = ChartRenderer(output_path=config.chart_path)
        self.ticker = TickerCycle(
            self.fetcher,
            config.watchlist,
            delay_seconds=config.ticker_delay_seconds,
            cooldown_seconds=config.quote_ttl_seconds,
            on_update=on_ticker_update,
            sleep=sleep,
        )
        self.search_flow = SearchFlow(self.fetcher, self.chart, on_update=on_search_update)

    @staticmethod
    def _build_provider(config: WidgetConfig) -> BaseQuoteProvider:
        kwargs: dict[str, Any] = {}
        if config.provider is ProviderType.ALPHAVANTAGE:
            kwargs["api_key"] = config.alphavantage_api_key
            kwargs["timeout"] = config.request_timeout
        elif config.provider is ProviderType.FINNHUB:
            kwargs["api_key"] = config.finnhub_api_key
            kwargs["timeout"] = config.request_timeout
        return create_provider(config.provider, **kwargs)

    # ------------------------------------------------------------- actions

    def search(self, symbol: str | None) -> SearchView:
        return self.search_flow.submit(symbol)

    def start_ticker(self) -> TickerHandle:
        return self.ticker.start()

    def close(self) -> None:
        self.ticker.stop()
        self.chart.close()
