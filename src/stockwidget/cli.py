"""Command-line interface: ticker bar, symbol prompt, quotes and charts."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional

import typer
from dotenv import find_dotenv, load_dotenv

from stockwidget import config_from_env
from stockwidget.config import ProviderType, WidgetConfig
from stockwidget.errors import StockWidgetError
from stockwidget.search import SearchView
from stockwidget.ticker import format_ticker_fragment
from stockwidget.widget import StockWidget

app = typer.Typer(
    help="""Stock ticker bar, symbol search and 30-day price chart.

    Examples:
      stockwidget run
      stockwidget quote AAPL MSFT
      stockwidget chart AAPL --output aapl.png
    """,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

QUIT_WORDS = {"quit", "exit", "q"}


@dataclass
class CLIState:
    config: WidgetConfig


@app.callback()
def root(
    ctx: typer.Context,
    provider: Optional[ProviderType] = typer.Option(
        None,
        "--provider",
        "-p",
        case_sensitive=False,
        help="Data provider (overrides STOCKWIDGET_PROVIDER).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = config_from_env()
    except StockWidgetError as exc:
        _fail(exc)
    if provider is not None:
        cfg.provider = provider
    ctx.obj = CLIState(config=cfg)


@app.command("run", help="Start the ticker bar and search symbols interactively (Enter submits).")
def run(ctx: typer.Context) -> None:
    widget = _build_widget(ctx, on_ticker_update=lambda text: typer.echo(f"[ticker] {text}"))
    handle = widget.start_ticker()
    try:
        while True:
            try:
                raw = typer.prompt("Symbol", default="", show_default=False)
            except typer.Abort:
                break
            if raw.strip().lower() in QUIT_WORDS:
                break
            _print_view(widget.search(raw))
    finally:
        handle.cancel()
        handle.join(timeout=1.0)
        widget.close()


@app.command("quote", help="Print quotes for one or more symbols.")
def quote(
    ctx: typer.Context,
    symbols: list[str] = typer.Argument(..., metavar="SYMBOL...", help="Example: AAPL MSFT"),
) -> None:
    widget = _build_widget(ctx)
    for q in widget.fetcher.fetch_quotes(symbols):
        typer.echo(format_ticker_fragment(q.symbol, q))


@app.command("chart", help="Search one symbol and save its price chart.")
def chart(
    ctx: typer.Context,
    symbol: str = typer.Argument(..., help="Ticker symbol, e.g. AAPL."),
    output: str = typer.Option("chart.png", "--output", "-o", help="Image file to write."),
) -> None:
    state: CLIState = ctx.obj
    state.config = dataclasses.replace(state.config, chart_path=output)
    widget = _build_widget(ctx)
    view = widget.search(symbol)
    _print_view(view)
    widget.close()
    if view.chart_rendered:
        typer.echo(f"Chart written to {output}")
    else:
        raise typer.Exit(code=1)


@app.command("ticker", help="Run the ticker bar in the foreground (Ctrl+C to stop).")
def ticker(
    ctx: typer.Context,
    cycles: Optional[int] = typer.Option(None, "--cycles", "-n", min=1, help="Stop after N passes."),
) -> None:
    widget = _build_widget(ctx, on_ticker_update=typer.echo)
    try:
        widget.ticker.run_forever(max_cycles=cycles)
    except KeyboardInterrupt:
        pass
    finally:
        widget.close()


def _build_widget(ctx: typer.Context, **kwargs) -> StockWidget:
    state: CLIState = ctx.obj
    try:
        return StockWidget(state.config, **kwargs)
    except StockWidgetError as exc:
        _fail(exc)


def _print_view(view: SearchView) -> None:
    typer.echo(view.text)


def _fail(exc: StockWidgetError) -> None:
    typer.secho(f"Error [{exc.code.value}]: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def run_app() -> None:
    app()
