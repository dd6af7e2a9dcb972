"""Search flow: symbol in, quote details and price chart out."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable

from stockwidget.chart import ChartRenderer
from stockwidget.errors import ErrorCode
from stockwidget.fetcher import QuoteFetcher
from stockwidget.models.history import HistoryResult, HistoryStatus
from stockwidget.models.quote import Quote, QuoteStatus
from stockwidget.symbols import normalize_symbol

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter a stock symbol."
LOADING_MESSAGE = "Loading..."

QUOTE_MESSAGES = {
    QuoteStatus.RATE_LIMITED: "API limit reached. Please wait a minute and try again.",
    QuoteStatus.NETWORK_ERROR: "Error fetching data. Please try again.",
    QuoteStatus.INVALID_SYMBOL: "Stock not found. Check ticker (try AAPL, MSFT, META).",
}

HISTORY_NOTES = {
    HistoryStatus.RATE_LIMITED: "(Historical data unavailable: API limit reached.)",
    HistoryStatus.NO_DATA: "(No historical data.)",
    HistoryStatus.NETWORK_ERROR: "(Failed to load chart.)",
}
CHART_FAILED_NOTE = HISTORY_NOTES[HistoryStatus.NETWORK_ERROR]


@dataclass
class SearchView:
    """What the search panel shows.

    Attributes:
        symbol: Normalized symbol searched for ("" for empty input).
        lines: Display lines, top to bottom.
        error: Error code when the quote could not be shown.
        quote: Quote that was looked up, if any.
        history: History result, once fetched.
        chart_rendered: Whether the chart was drawn for this search.
        stale: True when a newer search superseded this one.
    """

    symbol: str
    lines: list[str] = field(default_factory=list)
    error: ErrorCode | None = None
    quote: Quote | None = None
    history: HistoryResult | None = None
    chart_rendered: bool = False
    stale: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class SearchFlow:
    """Resolve a user-submitted symbol and drive the chart.

    Each submission takes a generation number; a response that arrives after
    a newer search started is dropped instead of overwriting the display.
    """

    def __init__(
        self,
        fetcher: QuoteFetcher,
        chart: ChartRenderer | None = None,
        on_update: Callable[[SearchView], None] | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.chart = chart
        self.on_update = on_update
        self._generation = 0
        self._lock = threading.Lock()

    def submit(self, raw: str | None) -> SearchView:
        symbol = normalize_symbol(raw)
        # an empty submission still supersedes any search in flight
        generation = self._next_generation()
        if not symbol:
            view = SearchView(symbol="", lines=[EMPTY_INPUT_MESSAGE], error=ErrorCode.EMPTY_INPUT)
            self._publish(view)
            return view

        self._publish(SearchView(symbol=symbol, lines=[LOADING_MESSAGE]))

        quote = self.fetcher.fetch_quote(symbol)
        if not self._is_current(generation):
            return self._superseded(symbol, quote=quote)

        if not quote.ok:
            view = SearchView(
                symbol=symbol,
                lines=[QUOTE_MESSAGES[quote.status]],
                error=ErrorCode(quote.status.value),
                quote=quote,
            )
            self._publish(view)
            return view

        self._publish(SearchView(symbol=symbol, lines=quote_lines(quote), quote=quote))
        view = SearchView(symbol=symbol, lines=quote_lines(quote), quote=quote)

        history = self.fetcher.fetch_history(symbol)
        if not self._is_current(generation):
            return self._superseded(symbol, quote=quote, history=history)
        view.history = history

        if not history.ok:
            view.lines.append(HISTORY_NOTES[history.status])
        elif self.chart is not None:
            try:
                self.chart.render(history.labels, history.values, self.chart_title(symbol))
                view.chart_rendered = True
            except Exception:
                logger.exception("Chart render for %s failed", symbol)
                view.lines.append(CHART_FAILED_NOTE)

        self._publish(view)
        return view

    def chart_title(self, symbol: str) -> str:
        return f"{symbol} Stock Price (Last {self.fetcher.history_days} Days)"

    # ------------------------------------------------------------ internal

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _superseded(self, symbol: str, **kwargs) -> SearchView:
        logger.debug("Dropping superseded search for %s", symbol)
        return SearchView(symbol=symbol, stale=True, **kwargs)

    def _publish(self, view: SearchView) -> None:
        if self.on_update is not None:
            self.on_update(view)


def quote_lines(quote: Quote) -> list[str]:
    return [
        quote.symbol,
        f"Price: ${quote.price_text}",
        f"Change: {quote.change}",
        f"Change %: {quote.change_percent}",
    ]
