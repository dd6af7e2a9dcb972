"""In-memory TTL cache for quotes."""

from __future__ import annotations

import threading
import time
from typing import Callable

from stockwidget.models.quote import Quote
from stockwidget.symbols import normalize_symbol


class QuoteCache:
    """Last successful quote per symbol, with freshness checks.

    Entries are never evicted: they are overwritten by the next successful
    fetch and simply go stale once older than ``ttl``. The key space is the
    watchlist plus whatever gets searched, so growth stays small. A lock
    guards the store because the ticker writes from its own thread.
    """

    def __init__(
        self,
        ttl_seconds: float = 600.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl = ttl_seconds
        self._clock = clock
        self._store: dict[str, Quote] = {}
        self._lock = threading.Lock()

    def get(self, symbol: str) -> Quote | None:
        """Return the cached quote (fresh or stale), or None on miss."""
        with self._lock:
            return self._store.get(normalize_symbol(symbol))

    def put(self, symbol: str, quote: Quote) -> None:
        """Store a successful quote. Failed lookups are never cached."""
        if not quote.ok:
            raise ValueError(f"Refusing to cache {quote.status.value} quote for {quote.symbol}")
        with self._lock:
            self._store[normalize_symbol(symbol)] = quote

    def is_fresh(
        self,
        quote: Quote,
        ttl: float | None = None,
        now: float | None = None,
    ) -> bool:
        ttl = self.ttl if ttl is None else ttl
        now = self._clock() if now is None else now
        return now - quote.fetched_at < ttl

    def get_fresh(self, symbol: str) -> Quote | None:
        """Return the cached quote only if it is still fresh."""
        quote = self.get(symbol)
        if quote is not None and self.is_fresh(quote):
            return quote
        return None

    def clear(self, symbol: str) -> None:
        with self._lock:
            self._store.pop(normalize_symbol(symbol), None)

    def clear_all(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, symbol: object) -> bool:
        if not isinstance(symbol, str):
            return False
        with self._lock:
            return normalize_symbol(symbol) in self._store
