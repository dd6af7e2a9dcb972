"""Tests for data models."""

from decimal import Decimal

import pytest

from stockwidget.models.history import HistoryPoint, HistoryResult, HistoryStatus
from stockwidget.models.quote import PLACEHOLDER, Quote, QuoteStatus


class TestQuote:
    def test_price_rounded_to_cents(self, sample_quote):
        assert sample_quote.price == Decimal("189.23")
        assert sample_quote.price_text == "189.23"
        assert sample_quote.ok

    def test_half_up_rounding(self):
        q = Quote.from_price("AAPL", "10.005")
        assert q.price_text == "10.01"

    def test_float_price(self):
        q = Quote.from_price("AAPL", 150.0)
        assert q.price_text == "150.00"

    def test_change_fields_carried_through(self, sample_quote):
        assert sample_quote.change == "1.2300"
        assert sample_quote.change_percent == "0.6543%"

    def test_missing_change_uses_placeholder(self):
        q = Quote.from_price("AAPL", "1", change=None, change_percent="")
        assert q.change == PLACEHOLDER
        assert q.change_percent == PLACEHOLDER

    @pytest.mark.parametrize("bad", ["abc", "", "NaN", "inf"])
    def test_unparsable_price(self, bad):
        with pytest.raises(ValueError):
            Quote.from_price("AAPL", bad)

    def test_failed_quote_has_no_price(self):
        q = Quote.failed("AAPL", QuoteStatus.RATE_LIMITED, fetched_at=5.0)
        assert not q.ok
        assert q.price is None
        assert q.price_text is None
        assert q.change is None
        assert q.fetched_at == 5.0

    def test_failed_quote_rejects_ok(self):
        with pytest.raises(ValueError):
            Quote.failed("AAPL", QuoteStatus.OK)

    def test_frozen(self, sample_quote):
        with pytest.raises(AttributeError):
            sample_quote.price = Decimal("1")  # type: ignore[misc]


class TestHistoryResult:
    def test_labels_and_values(self):
        result = HistoryResult(
            symbol="AAPL",
            status=HistoryStatus.OK,
            points=[HistoryPoint("2024-01-02", 185.0), HistoryPoint("2024-01-03", 184.25)],
        )
        assert result.ok
        assert result.labels == ["2024-01-02", "2024-01-03"]
        assert result.values == [185.0, 184.25]

    def test_failure_defaults_empty(self):
        result = HistoryResult(symbol="AAPL", status=HistoryStatus.RATE_LIMITED)
        assert not result.ok
        assert result.points == []
