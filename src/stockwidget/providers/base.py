"""Abstract base class for quote/history providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockwidget.models.history import HistoryPoint
from stockwidget.models.quote import Quote


class BaseQuoteProvider(ABC):
    """Abstract base for all market data providers.

    Implementations return data only on success. Every failure is raised as
    ``StockWidgetError`` with the code that classifies it:

    * ``RATE_LIMITED`` when the provider signals throttling, whatever else
      the response carries,
    * ``INVALID_SYMBOL`` when a quote response has no price for the symbol,
    * ``NO_HISTORY_DATA`` when a history response has no usable closes,
    * ``NETWORK_ERROR`` for transport failures, non-success status codes and
      malformed bodies.
    """

    name = "base"

    @abstractmethod
    def get_quote(self, symbol: str) -> Quote:
        """Fetch the latest quote for one (normalized) symbol."""
        ...

    def get_quotes(self, symbols: list[str]) -> list[Quote | Exception]:
        """Fetch several quotes (default: serial calls).

        Returns one entry per symbol, in order: the quote, or the exception
        raised for that symbol, so one failure does not sink the batch.
        """
        results: list[Quote | Exception] = []
        for symbol in symbols:
            try:
                results.append(self.get_quote(symbol))
            except Exception as exc:
                results.append(exc)
        return results

    @abstractmethod
    def get_history(self, symbol: str, limit: int = 30) -> list[HistoryPoint]:
        """Fetch up to ``limit`` daily closes, oldest first."""
        ...
