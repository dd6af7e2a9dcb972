"""Cache-first quote lookups and daily history."""

from __future__ import annotations

import dataclasses
import logging
import time
from typing import Callable

from stockwidget.cache import QuoteCache
from stockwidget.errors import ErrorCode, StockWidgetError
from stockwidget.models.history import HistoryResult, HistoryStatus
from stockwidget.models.quote import Quote, QuoteStatus
from stockwidget.providers.base import BaseQuoteProvider
from stockwidget.symbols import normalize_symbol

logger = logging.getLogger(__name__)

_QUOTE_STATUS: dict[ErrorCode, QuoteStatus] = {
    ErrorCode.RATE_LIMITED: QuoteStatus.RATE_LIMITED,
    ErrorCode.INVALID_SYMBOL: QuoteStatus.INVALID_SYMBOL,
}

_HISTORY_STATUS: dict[ErrorCode, HistoryStatus] = {
    ErrorCode.RATE_LIMITED: HistoryStatus.RATE_LIMITED,
    ErrorCode.NO_HISTORY_DATA: HistoryStatus.NO_DATA,
    ErrorCode.INVALID_SYMBOL: HistoryStatus.NO_DATA,
}


class QuoteFetcher:
    """Resolve symbols to quotes: cache -> provider -> classify -> store.

    Provider errors never escape: they come back as a ``Quote`` (or
    ``HistoryResult``) carrying the failure status. Only successful quotes
    are written to the cache, so a failed lookup is re-fetched next time.

    Usage::

        fetcher = QuoteFetcher(provider, QuoteCache(ttl_seconds=600))
        quote = fetcher.fetch_quote("aapl ")
        if quote.ok:
            print(quote.price_text)
    """

    def __init__(
        self,
        provider: BaseQuoteProvider,
        cache: QuoteCache,
        clock: Callable[[], float] = time.time,
        history_days: int = 30,
    ) -> None:
        self.provider = provider
        self.cache = cache
        self.history_days = history_days
        self._clock = clock

    # --------------------------------------------------------------- quotes

    def fetch_quote(self, symbol: str) -> Quote:
        symbol = normalize_symbol(symbol)

        # 1. Cache hit?
        cached = self.cache.get_fresh(symbol)
        if cached is not None:
            logger.debug("Quote cache hit for %s", symbol)
            return cached

        # 2. Provider
        try:
            quote = self.provider.get_quote(symbol)
        except Exception as exc:
            return self._failed_quote(symbol, exc)

        # 3. Stamp and store
        return self._store(symbol, quote)

    def fetch_quotes(self, symbols: list[str]) -> list[Quote]:
        """Resolve several symbols, batching everything not freshly cached.

        Results come back in input order; duplicates share one request.
        """
        normalized = [normalize_symbol(s) for s in symbols]
        results: dict[str, Quote] = {}
        missing: list[str] = []
        for symbol in normalized:
            if symbol in results or symbol in missing:
                continue
            cached = self.cache.get_fresh(symbol)
            if cached is not None:
                results[symbol] = cached
            else:
                missing.append(symbol)

        if missing:
            for symbol, outcome in zip(missing, self.provider.get_quotes(missing)):
                if isinstance(outcome, Exception):
                    results[symbol] = self._failed_quote(symbol, outcome)
                else:
                    results[symbol] = self._store(symbol, outcome)

        return [results[s] for s in normalized]

    # -------------------------------------------------------------- history

    def fetch_history(self, symbol: str) -> HistoryResult:
        """Fetch the last ``history_days`` daily closes. Never cached."""
        symbol = normalize_symbol(symbol)
        try:
            points = self.provider.get_history(symbol, limit=self.history_days)
        except StockWidgetError as exc:
            status = _HISTORY_STATUS.get(exc.code, HistoryStatus.NETWORK_ERROR)
            logger.warning("History for %s failed (%s): %s", symbol, status.value, exc)
            return HistoryResult(symbol=symbol, status=status)
        except Exception:
            logger.exception("Unexpected %s history error for %s", self.provider.name, symbol)
            return HistoryResult(symbol=symbol, status=HistoryStatus.NETWORK_ERROR)

        if not points:
            return HistoryResult(symbol=symbol, status=HistoryStatus.NO_DATA)
        return HistoryResult(symbol=symbol, status=HistoryStatus.OK, points=points)

    # ------------------------------------------------------------ internal

    def _store(self, symbol: str, quote: Quote) -> Quote:
        quote = dataclasses.replace(quote, symbol=symbol, fetched_at=self._clock())
        if quote.ok:
            self.cache.put(symbol, quote)
        return quote

    def _failed_quote(self, symbol: str, exc: Exception) -> Quote:
        if isinstance(exc, StockWidgetError):
            status = _QUOTE_STATUS.get(exc.code, QuoteStatus.NETWORK_ERROR)
            logger.warning("Quote for %s failed (%s): %s", symbol, status.value, exc)
        else:
            status = QuoteStatus.NETWORK_ERROR
            logger.error(
                "Unexpected %s quote error for %s", self.provider.name, symbol,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
        return Quote.failed(symbol, status, fetched_at=self._clock())
