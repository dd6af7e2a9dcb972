"""Shared fixtures for stockwidget tests."""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import MagicMock

import matplotlib
import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

matplotlib.use("Agg")

from stockwidget.cache import QuoteCache
from stockwidget.fetcher import QuoteFetcher
from stockwidget.models.quote import Quote
from stockwidget.providers.mock import MockProvider


class FakeClock:
    """Manually advanced clock (epoch seconds)."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(payload=None, status_code: int = 200, json_error: bool = False) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    if json_error:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = payload
    return resp


def make_session(*responses) -> MagicMock:
    session = MagicMock()
    session.get.side_effect = list(responses)
    return session


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def cache(clock) -> QuoteCache:
    return QuoteCache(ttl_seconds=600, clock=clock)


@pytest.fixture
def fetcher(mock_provider, cache, clock) -> QuoteFetcher:
    return QuoteFetcher(mock_provider, cache, clock=clock)


@pytest.fixture
def sample_quote(clock) -> Quote:
    return Quote.from_price(
        "AAPL", "189.2345", change="1.2300", change_percent="0.6543%", fetched_at=clock(),
    )


@pytest.fixture
def global_quote_payload() -> dict:
    return {
        "Global Quote": {
            "01. symbol": "AAPL",
            "05. price": "189.2345",
            "09. change": "1.2300",
            "10. change percent": "0.6543%",
        }
    }


@pytest.fixture
def daily_series_payload() -> dict:
    """20 trading days, newest first, one null close (2024-01-10)."""
    days = [
        "2024-01-26", "2024-01-25", "2024-01-24", "2024-01-23", "2024-01-22",
        "2024-01-19", "2024-01-18", "2024-01-17", "2024-01-16", "2024-01-12",
        "2024-01-11", "2024-01-10", "2024-01-09", "2024-01-08", "2024-01-05",
        "2024-01-04", "2024-01-03", "2024-01-02", "2023-12-29", "2023-12-28",
    ]
    series = {}
    for i, day in enumerate(days):
        close = None if day == "2024-01-10" else f"{190.0 - i * 0.5:.4f}"
        series[day] = {"1. open": "188.0000", "4. close": close, "5. volume": "1000"}
    return {"Meta Data": {"2. Symbol": "AAPL"}, "Time Series (Daily)": series}
