"""Alpha Vantage data provider.

Quotes come from ``GLOBAL_QUOTE`` and history from ``TIME_SERIES_DAILY``.
The free tier allows roughly five requests a minute; past that the API
answers 200 with a ``Note`` (or ``Information``) field instead of data.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import requests

from stockwidget.errors import ErrorCode, StockWidgetError
from stockwidget.history import points_from_date_mapping
from stockwidget.models.history import HistoryPoint
from stockwidget.models.quote import Quote
from stockwidget.providers.base import BaseQuoteProvider

logger = logging.getLogger(__name__)

# Present instead of data when the key is over quota.
THROTTLE_KEYS = ("Note", "Information")


class AlphaVantageProvider(BaseQuoteProvider):
    """Fetch quotes and daily closes from alphavantage.co."""

    name = "alphavantage"
    base_url = "https://www.alphavantage.co/query"

    def __init__(
        self,
        api_key: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key or os.getenv("ALPHAVANTAGE_API_KEY")
        if not self.api_key:
            raise StockWidgetError(
                "Alpha Vantage API key required. Set ALPHAVANTAGE_API_KEY env var or pass api_key.",
                code=ErrorCode.CONFIG_ERROR,
            )
        self.session = session or requests.Session()
        self.timeout = timeout

    # --------------------------------------------------------------- quotes

    def get_quote(self, symbol: str) -> Quote:
        data = self._query("GLOBAL_QUOTE", symbol)

        q = data.get("Global Quote")
        if not isinstance(q, dict) or not q.get("05. price"):
            raise StockWidgetError(
                f"No Alpha Vantage quote for {symbol}",
                code=ErrorCode.INVALID_SYMBOL,
            )

        try:
            return Quote.from_price(
                symbol,
                q["05. price"],
                change=q.get("09. change"),
                change_percent=q.get("10. change percent"),
            )
        except ValueError as exc:
            raise StockWidgetError(
                f"Malformed Alpha Vantage quote for {symbol}: {exc}",
                code=ErrorCode.NETWORK_ERROR,
            ) from exc

    # -------------------------------------------------------------- history

    def get_history(self, symbol: str, limit: int = 30) -> list[HistoryPoint]:
        data = self._query("TIME_SERIES_DAILY", symbol, outputsize="compact")

        series = data.get("Time Series (Daily)")
        if not isinstance(series, dict) or not series:
            raise StockWidgetError(
                f"No Alpha Vantage history for {symbol}",
                code=ErrorCode.NO_HISTORY_DATA,
            )

        points = points_from_date_mapping(series, close_key="4. close", limit=limit)
        if not points:
            raise StockWidgetError(
                f"Alpha Vantage history for {symbol} has no closing prices",
                code=ErrorCode.NO_HISTORY_DATA,
            )
        return points

    # ------------------------------------------------------------- internal

    def _query(self, function: str, symbol: str, **extra: str) -> dict[str, Any]:
        params = {"function": function, "symbol": symbol, "apikey": self.api_key, **extra}
        try:
            resp = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise StockWidgetError(
                f"Alpha Vantage {function} request failed: {exc}",
                code=ErrorCode.NETWORK_ERROR,
            ) from exc

        if resp.status_code != 200:
            raise StockWidgetError(
                f"Alpha Vantage {function} returned HTTP {resp.status_code}",
                code=ErrorCode.NETWORK_ERROR,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise StockWidgetError(
                f"Alpha Vantage {function} returned a non-JSON body",
                code=ErrorCode.NETWORK_ERROR,
            ) from exc
        if not isinstance(data, dict):
            raise StockWidgetError(
                f"Alpha Vantage {function} returned an unexpected body",
                code=ErrorCode.NETWORK_ERROR,
            )

        for key in THROTTLE_KEYS:
            if key in data:
                logger.debug("Alpha Vantage throttled %s %s: %s", function, symbol, data[key])
                raise StockWidgetError(
                    f"Alpha Vantage rate limit: {data[key]}",
                    code=ErrorCode.RATE_LIMITED,
                )

        if data.get("Error Message"):
            code = (
                ErrorCode.INVALID_SYMBOL if function == "GLOBAL_QUOTE"
                else ErrorCode.NO_HISTORY_DATA
            )
            raise StockWidgetError(data["Error Message"], code=code)

        return data
