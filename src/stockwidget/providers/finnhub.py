"""Finnhub data provider.

Quotes come from ``/quote`` and history from ``/stock/candle`` with daily
resolution. Finnhub throttles with HTTP 429 and an ``error`` field; unknown
symbols come back as a quote with a zero price.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable

import requests

from stockwidget.errors import ErrorCode, StockWidgetError
from stockwidget.history import points_from_arrays
from stockwidget.models.history import HistoryPoint
from stockwidget.models.quote import Quote
from stockwidget.providers.base import BaseQuoteProvider

logger = logging.getLogger(__name__)

# Calendar days requested per trading day wanted; covers weekends and holidays.
_CALENDAR_DAYS_PER_TRADING_DAY = 2


class FinnhubProvider(BaseQuoteProvider):
    """Fetch quotes and daily candles from finnhub.io."""

    name = "finnhub"
    base_url = "https://finnhub.io/api/v1"

    def __init__(
        self,
        api_key: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.api_key = api_key or os.getenv("FINNHUB_API_KEY")
        if not self.api_key:
            raise StockWidgetError(
                "Finnhub API key required. Set FINNHUB_API_KEY env var or pass api_key.",
                code=ErrorCode.CONFIG_ERROR,
            )
        self.session = session or requests.Session()
        self.timeout = timeout
        self._clock = clock

    def get_quote(self, symbol: str) -> Quote:
        data = self._get("/quote", symbol=symbol)

        price = data.get("c")
        if not price:
            raise StockWidgetError(
                f"No Finnhub quote for {symbol}",
                code=ErrorCode.INVALID_SYMBOL,
            )

        change = data.get("d")
        change_pct = data.get("dp")
        try:
            return Quote.from_price(
                symbol,
                price,
                change=f"{float(change):.4f}" if change is not None else None,
                change_percent=f"{float(change_pct):.4f}%" if change_pct is not None else None,
            )
        except (TypeError, ValueError) as exc:
            raise StockWidgetError(
                f"Malformed Finnhub quote for {symbol}: {exc}",
                code=ErrorCode.NETWORK_ERROR,
            ) from exc

    def get_history(self, symbol: str, limit: int = 30) -> list[HistoryPoint]:
        now = int(self._clock())
        span = max(limit, 1) * _CALENDAR_DAYS_PER_TRADING_DAY * 86_400
        data = self._get(
            "/stock/candle",
            symbol=symbol,
            resolution="D",
            **{"from": now - span, "to": now},
        )

        if data.get("s") != "ok":
            raise StockWidgetError(
                f"No Finnhub history for {symbol}",
                code=ErrorCode.NO_HISTORY_DATA,
            )

        try:
            points = points_from_arrays(data.get("t") or [], data.get("c") or [], limit=limit)
        except ValueError as exc:
            raise StockWidgetError(
                f"Malformed Finnhub candles for {symbol}: {exc}",
                code=ErrorCode.NETWORK_ERROR,
            ) from exc
        if not points:
            raise StockWidgetError(
                f"Finnhub history for {symbol} has no closing prices",
                code=ErrorCode.NO_HISTORY_DATA,
            )
        return points

    # ------------------------------------------------------------- internal

    def _get(self, path: str, **params: Any) -> dict[str, Any]:
        params["token"] = self.api_key
        try:
            resp = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise StockWidgetError(
                f"Finnhub {path} request failed: {exc}",
                code=ErrorCode.NETWORK_ERROR,
            ) from exc

        if resp.status_code == 429:
            raise StockWidgetError("Finnhub rate limited", code=ErrorCode.RATE_LIMITED)
        if resp.status_code != 200:
            raise StockWidgetError(
                f"Finnhub {path} returned HTTP {resp.status_code}",
                code=ErrorCode.NETWORK_ERROR,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise StockWidgetError(
                f"Finnhub {path} returned a non-JSON body",
                code=ErrorCode.NETWORK_ERROR,
            ) from exc
        if not isinstance(data, dict):
            raise StockWidgetError(
                f"Finnhub {path} returned an unexpected body",
                code=ErrorCode.NETWORK_ERROR,
            )

        error = data.get("error")
        if error:
            if "limit" in str(error).lower():
                logger.debug("Finnhub throttled %s: %s", path, error)
                raise StockWidgetError(f"Finnhub rate limit: {error}", code=ErrorCode.RATE_LIMITED)
            raise StockWidgetError(f"Finnhub {path} error: {error}", code=ErrorCode.NETWORK_ERROR)

        return data
