"""Tests for the typer CLI, run against the mock provider."""

import pytest
from typer.testing import CliRunner

from stockwidget.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _mock_env(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)  # keep load_dotenv away from real .env files
    for key in ("STOCKWIDGET_WATCHLIST", "STOCKWIDGET_CHART_PATH", "ALPHAVANTAGE_API_KEY", "FINNHUB_API_KEY"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("STOCKWIDGET_PROVIDER", "mock")
    monkeypatch.setenv("STOCKWIDGET_TICKER_DELAY", "0")


class TestQuoteCommand:
    def test_quotes(self):
        result = runner.invoke(app, ["quote", "aapl", "MSFT"])
        assert result.exit_code == 0, result.output
        assert "AAPL: $150.00" in result.output
        assert "MSFT: $150.00" in result.output


class TestChartCommand:
    def test_writes_chart(self, tmp_path):
        out = tmp_path / "aapl.png"
        result = runner.invoke(app, ["chart", "aapl", "--output", str(out)])
        assert result.exit_code == 0, result.output
        assert "Price: $150.00" in result.output
        assert out.exists()


class TestTickerCommand:
    def test_single_pass(self, monkeypatch):
        monkeypatch.setenv("STOCKWIDGET_WATCHLIST", "AAPL,MSFT")
        result = runner.invoke(app, ["ticker", "--cycles", "1"])
        assert result.exit_code == 0, result.output
        assert "AAPL: $150.00 | MSFT: $150.00" in result.output


class TestRunCommand:
    def test_search_then_quit(self, monkeypatch):
        monkeypatch.setenv("STOCKWIDGET_WATCHLIST", "AAPL")
        result = runner.invoke(app, ["run"], input="\nmsft\nquit\n")
        assert result.exit_code == 0, result.output
        assert "Please enter a stock symbol." in result.output
        assert "Price: $150.00" in result.output

    def test_eof_stops(self):
        result = runner.invoke(app, ["run"], input="")
        assert result.exit_code == 0, result.output
        assert "Aborted" not in result.output


class TestConfigErrors:
    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setenv("STOCKWIDGET_PROVIDER", "alphavantage")
        result = runner.invoke(app, ["quote", "AAPL"])
        assert result.exit_code == 1
        assert "config_error" in result.output

    def test_provider_flag_overrides_env(self, monkeypatch):
        monkeypatch.setenv("STOCKWIDGET_PROVIDER", "alphavantage")
        result = runner.invoke(app, ["--provider", "mock", "quote", "AAPL"])
        assert result.exit_code == 0, result.output
        assert "AAPL: $150.00" in result.output
