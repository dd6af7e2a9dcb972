"""Mock provider for testing and offline demos, no API keys required."""

from __future__ import annotations

from datetime import date, timedelta

from stockwidget.errors import ErrorCode, StockWidgetError
from stockwidget.models.history import HistoryPoint
from stockwidget.models.quote import Quote
from stockwidget.providers.base import BaseQuoteProvider


class MockProvider(BaseQuoteProvider):
    """In-memory provider that returns configurable static data.

    Use ``set_quote`` / ``set_history`` to pre-load data or an ``ErrorCode``
    to fail with, or leave defaults for synthetic data. Every request is
    recorded in ``calls`` as ``(method, symbol)``.
    """

    name = "mock"

    def __init__(self) -> None:
        self._quotes: dict[str, Quote | ErrorCode] = {}
        self._history: dict[str, list[HistoryPoint] | ErrorCode] = {}
        self.calls: list[tuple[str, str]] = []

    # --- Pre-load helpers ---

    def set_quote(self, symbol: str, quote: Quote | ErrorCode) -> None:
        self._quotes[symbol.upper()] = quote

    def set_history(self, symbol: str, points: list[HistoryPoint] | ErrorCode) -> None:
        self._history[symbol.upper()] = points

    def quote_calls(self, symbol: str | None = None) -> int:
        return sum(
            1 for method, sym in self.calls
            if method == "quote" and (symbol is None or sym == symbol.upper())
        )

    # --- Provider implementation ---

    def get_quote(self, symbol: str) -> Quote:
        key = symbol.upper()
        self.calls.append(("quote", key))
        preset = self._quotes.get(key)
        if isinstance(preset, ErrorCode):
            raise StockWidgetError(f"Mock {preset.value} for {key}", code=preset)
        if preset is not None:
            return preset
        return Quote.from_price(key, "150.00", change="1.2500", change_percent="0.8403%")

    def get_history(self, symbol: str, limit: int = 30) -> list[HistoryPoint]:
        key = symbol.upper()
        self.calls.append(("history", key))
        preset = self._history.get(key)
        if isinstance(preset, ErrorCode):
            raise StockWidgetError(f"Mock {preset.value} for {key}", code=preset)
        if preset is not None:
            return preset[-limit:] if limit > 0 else []
        return self._generate_history(limit)

    # --- Synthetic data generation ---

    @staticmethod
    def _generate_history(limit: int, end: date = date(2024, 1, 31)) -> list[HistoryPoint]:
        """Weekday closes ending at ``end``, oldest first."""
        points: list[HistoryPoint] = []
        current = end
        while len(points) < limit:
            if current.weekday() < 5:
                close = 150.0 + (len(points) % 5) * 0.5
                points.append(HistoryPoint(label=current.isoformat(), close=round(close, 2)))
            current -= timedelta(days=1)
        points.reverse()
        return points
