"""Tests for AlphaVantageProvider response classification (no network)."""

from decimal import Decimal

import pytest
import requests

from conftest import make_response, make_session
from stockwidget.errors import ErrorCode, StockWidgetError
from stockwidget.models.quote import PLACEHOLDER
from stockwidget.providers.alphavantage import AlphaVantageProvider


def _provider(*responses) -> AlphaVantageProvider:
    return AlphaVantageProvider(api_key="test-key", session=make_session(*responses))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("ALPHAVANTAGE_API_KEY", raising=False)


class TestAlphaVantageInit:
    def test_requires_key(self):
        with pytest.raises(StockWidgetError) as exc_info:
            AlphaVantageProvider()
        assert exc_info.value.code == ErrorCode.CONFIG_ERROR

    def test_key_from_env(self, monkeypatch):
        monkeypatch.setenv("ALPHAVANTAGE_API_KEY", "env-key")
        assert AlphaVantageProvider().api_key == "env-key"


class TestAlphaVantageQuote:
    def test_ok(self, global_quote_payload):
        provider = _provider(make_response(global_quote_payload))
        quote = provider.get_quote("AAPL")
        assert quote.ok
        assert quote.price == Decimal("189.23")
        assert quote.change == "1.2300"
        assert quote.change_percent == "0.6543%"

        _, kwargs = provider.session.get.call_args
        assert kwargs["params"]["function"] == "GLOBAL_QUOTE"
        assert kwargs["params"]["symbol"] == "AAPL"
        assert kwargs["params"]["apikey"] == "test-key"

    def test_missing_change_fields(self):
        provider = _provider(make_response({"Global Quote": {"05. price": "10"}}))
        quote = provider.get_quote("AAPL")
        assert quote.change == PLACEHOLDER
        assert quote.change_percent == PLACEHOLDER

    @pytest.mark.parametrize("key", ["Note", "Information"])
    def test_throttle_signal(self, key):
        provider = _provider(make_response({key: "Thank you for using Alpha Vantage!"}))
        with pytest.raises(StockWidgetError) as exc_info:
            provider.get_quote("AAPL")
        assert exc_info.value.code == ErrorCode.RATE_LIMITED

    def test_throttle_wins_over_data(self, global_quote_payload):
        payload = dict(global_quote_payload, Note="limit reached")
        provider = _provider(make_response(payload))
        with pytest.raises(StockWidgetError) as exc_info:
            provider.get_quote("AAPL")
        assert exc_info.value.code == ErrorCode.RATE_LIMITED

    @pytest.mark.parametrize("payload", [
        {"Global Quote": {}},
        {"Global Quote": {"01. symbol": "ZZZZ"}},
        {"Global Quote": {"05. price": ""}},
        {},
        {"Error Message": "Invalid API call."},
    ])
    def test_missing_price_is_invalid_symbol(self, payload):
        provider = _provider(make_response(payload))
        with pytest.raises(StockWidgetError) as exc_info:
            provider.get_quote("ZZZZ")
        assert exc_info.value.code == ErrorCode.INVALID_SYMBOL

    def test_transport_failure(self):
        session = make_session(requests.ConnectionError("boom"))
        provider = AlphaVantageProvider(api_key="k", session=session)
        with pytest.raises(StockWidgetError) as exc_info:
            provider.get_quote("AAPL")
        assert exc_info.value.code == ErrorCode.NETWORK_ERROR

    def test_http_error(self):
        provider = _provider(make_response({}, status_code=503))
        with pytest.raises(StockWidgetError) as exc_info:
            provider.get_quote("AAPL")
        assert exc_info.value.code == ErrorCode.NETWORK_ERROR

    def test_malformed_body(self):
        provider = _provider(make_response(json_error=True))
        with pytest.raises(StockWidgetError) as exc_info:
            provider.get_quote("AAPL")
        assert exc_info.value.code == ErrorCode.NETWORK_ERROR

    def test_non_object_body(self):
        provider = _provider(make_response(["AAPL"]))
        with pytest.raises(StockWidgetError) as exc_info:
            provider.get_quote("AAPL")
        assert exc_info.value.code == ErrorCode.NETWORK_ERROR

    def test_unparsable_price(self):
        provider = _provider(make_response({"Global Quote": {"05. price": "abc"}}))
        with pytest.raises(StockWidgetError) as exc_info:
            provider.get_quote("AAPL")
        assert exc_info.value.code == ErrorCode.NETWORK_ERROR


class TestAlphaVantageHistory:
    def test_ok_skips_null_close(self, daily_series_payload):
        provider = _provider(make_response(daily_series_payload))
        points = provider.get_history("AAPL")
        assert len(points) == 19
        assert points[0].label == "2023-12-28"
        assert points[-1].label == "2024-01-26"

        _, kwargs = provider.session.get.call_args
        assert kwargs["params"]["function"] == "TIME_SERIES_DAILY"

    def test_limit(self, daily_series_payload):
        provider = _provider(make_response(daily_series_payload))
        points = provider.get_history("AAPL", limit=5)
        assert [p.label for p in points][-1] == "2024-01-26"
        assert len(points) == 5

    def test_throttled(self):
        provider = _provider(make_response({"Note": "slow down"}))
        with pytest.raises(StockWidgetError) as exc_info:
            provider.get_history("AAPL")
        assert exc_info.value.code == ErrorCode.RATE_LIMITED

    @pytest.mark.parametrize("payload", [
        {"Meta Data": {}},
        {"Time Series (Daily)": {}},
        {"Time Series (Daily)": {"2024-01-02": {"4. close": None}}},
        {"Error Message": "Invalid API call."},
    ])
    def test_no_data(self, payload):
        provider = _provider(make_response(payload))
        with pytest.raises(StockWidgetError) as exc_info:
            provider.get_history("ZZZZ")
        assert exc_info.value.code == ErrorCode.NO_HISTORY_DATA
