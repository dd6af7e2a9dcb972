"""Quote (last price / change) data model."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

# Shown in place of change fields the provider left out.
PLACEHOLDER = "—"

_CENTS = Decimal("0.01")


class QuoteStatus(Enum):
    """Outcome of a quote lookup. Only ``OK`` carries price data."""

    OK = "ok"
    RATE_LIMITED = "rate_limited"
    INVALID_SYMBOL = "invalid_symbol"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class Quote:
    """Last-known market data for one symbol.

    Attributes:
        symbol: Normalized ticker symbol.
        status: Lookup outcome.
        fetched_at: Retrieval time, epoch seconds.
        price: Last price, two fractional digits (OK only).
        change: Absolute change since prior close, provider text (OK only).
        change_percent: Percent change, provider text (OK only).
    """

    symbol: str
    status: QuoteStatus
    fetched_at: float
    price: Decimal | None = None
    change: str | None = None
    change_percent: str | None = None

    @classmethod
    def from_price(
        cls,
        symbol: str,
        price: str | float | Decimal,
        change: str | None = None,
        change_percent: str | None = None,
        fetched_at: float = 0.0,
    ) -> Quote:
        """Build an OK quote, rounding the price to cents.

        Raises:
            ValueError: If ``price`` is not a finite number.
        """
        try:
            value = Decimal(str(price).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Unparsable price: {price!r}") from exc
        if not value.is_finite():
            raise ValueError(f"Unparsable price: {price!r}")
        return cls(
            symbol=symbol,
            status=QuoteStatus.OK,
            fetched_at=fetched_at,
            price=value.quantize(_CENTS, rounding=ROUND_HALF_UP),
            change=change if change not in (None, "") else PLACEHOLDER,
            change_percent=change_percent if change_percent not in (None, "") else PLACEHOLDER,
        )

    @classmethod
    def failed(cls, symbol: str, status: QuoteStatus, fetched_at: float = 0.0) -> Quote:
        if status is QuoteStatus.OK:
            raise ValueError("A failed quote cannot have status OK")
        return cls(symbol=symbol, status=status, fetched_at=fetched_at)

    @property
    def ok(self) -> bool:
        return self.status is QuoteStatus.OK

    @property
    def price_text(self) -> str | None:
        """Price formatted with exactly two decimals, e.g. ``"189.20"``."""
        if self.price is None:
            return None
        return f"{self.price:.2f}"
