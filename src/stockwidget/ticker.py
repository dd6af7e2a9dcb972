"""Ticker bar, a self-pacing refresh loop over the watchlist.

One pass fetches every watchlist symbol in order, one request at a time,
pausing ``delay_seconds`` between requests so the provider's per-minute
quota is never exceeded. After the pass the cycle cools down for the quote
TTL, by which time every cached quote is stale, and starts again.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from stockwidget.fetcher import QuoteFetcher
from stockwidget.models.quote import Quote, QuoteStatus

logger = logging.getLogger(__name__)

FRAGMENT_SEPARATOR = " | "

_STATUS_TEXT = {
    QuoteStatus.RATE_LIMITED: "API Limit",
    QuoteStatus.NETWORK_ERROR: "Error",
    QuoteStatus.INVALID_SYMBOL: "N/A",
}


def format_ticker_fragment(symbol: str, quote: Quote | None) -> str:
    """Render one ticker entry, e.g. ``AAPL: $189.23`` or ``AAPL: API Limit``."""
    if quote is None:
        return f"{symbol}: Error"
    if quote.ok and quote.price_text is not None:
        return f"{symbol}: ${quote.price_text}"
    return f"{symbol}: {_STATUS_TEXT.get(quote.status, 'N/A')}"


class TickerHandle:
    """Handle on one background run of a ticker cycle.

    Each run owns its stop event, so cancelling a handle only ever stops
    the thread it was returned for.
    """

    def __init__(self, stop_event: threading.Event, thread: threading.Thread) -> None:
        self._stop_event = stop_event
        self._thread = thread

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()

    def cancel(self) -> None:
        """Stop the run; an in-progress pause ends immediately."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        self._thread.join(timeout)


class TickerCycle:
    """Repeating fetch phase / cooldown phase over a fixed watchlist.

    Args:
        fetcher: Quote source (cache-first).
        watchlist: Symbols to display, in order.
        delay_seconds: Pause between two consecutive symbol fetches.
        cooldown_seconds: Pause between two full passes.
        on_update: Called with the joined display text after every symbol.
        sleep: Pause function; defaults to waiting on the run's stop event so
            ``stop()`` interrupts it. Tests pass a recorder instead.
    """

    def __init__(
        self,
        fetcher: QuoteFetcher,
        watchlist: list[str],
        delay_seconds: float = 12.0,
        cooldown_seconds: float = 600.0,
        on_update: Callable[[str], None] | None = None,
        sleep: Callable[[float], object] | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.watchlist = list(watchlist)
        self.delay_seconds = delay_seconds
        self.cooldown_seconds = cooldown_seconds
        self.on_update = on_update
        self.fragments: list[str] = []
        self.cycles_completed = 0
        self._sleep = sleep
        self._stop_event = threading.Event()
        self._handle: TickerHandle | None = None
        self._lock = threading.Lock()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        self._stop_event.set()

    @property
    def display(self) -> str:
        return FRAGMENT_SEPARATOR.join(self.fragments)

    def run_once(self) -> list[str]:
        """Run one fetch phase and return the rendered fragments."""
        return self._fetch_pass(self._stop_event)

    def run_forever(self, max_cycles: int | None = None) -> None:
        """Alternate fetch and cooldown phases until stopped."""
        self._loop(self._stop_event, max_cycles)

    def start(self) -> TickerHandle:
        """Run the cycle on a daemon thread.

        While a previous run is still going, its handle is returned instead
        of a second thread. A cancelled run that has not exited yet is
        joined first, so two runs never fetch at the same time.
        """
        with self._lock:
            previous = self._handle
            if previous is not None and previous.running:
                if not previous.cancelled:
                    return previous
                previous.join()

            stop_event = threading.Event()
            self._stop_event = stop_event
            thread = threading.Thread(
                target=self._loop, args=(stop_event,), name="stockwidget-ticker", daemon=True,
            )
            self._handle = TickerHandle(stop_event, thread)
            thread.start()
            return self._handle

    # ------------------------------------------------------------ internal

    def _loop(self, stop_event: threading.Event, max_cycles: int | None = None) -> None:
        while not stop_event.is_set():
            self._fetch_pass(stop_event)
            self.cycles_completed += 1
            logger.info("Ticker pass %d done: %s", self.cycles_completed, self.display)
            if max_cycles is not None and self.cycles_completed >= max_cycles:
                break
            if stop_event.is_set():
                break
            self._pause(stop_event, self.cooldown_seconds)

    def _fetch_pass(self, stop_event: threading.Event) -> list[str]:
        parts: list[str] = []
        self.fragments = parts
        last = len(self.watchlist) - 1
        for i, symbol in enumerate(self.watchlist):
            if stop_event.is_set():
                break
            try:
                quote: Quote | None = self.fetcher.fetch_quote(symbol)
            except Exception:
                logger.exception("Ticker fetch for %s failed", symbol)
                quote = None

            parts.append(format_ticker_fragment(symbol, quote))
            self._publish()

            # pause before the next request, not after the last one
            if i < last:
                self._pause(stop_event, self.delay_seconds)
        return list(parts)

    def _pause(self, stop_event: threading.Event, seconds: float) -> None:
        if self._sleep is not None:
            self._sleep(seconds)
        else:
            stop_event.wait(seconds)

    def _publish(self) -> None:
        if self.on_update is None:
            return
        try:
            self.on_update(self.display)
        except Exception:
            logger.exception("Ticker display update failed")
