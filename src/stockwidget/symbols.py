"""Ticker symbol normalization."""

from __future__ import annotations


def normalize_symbol(symbol: str | None) -> str:
    """Trim and upper-case a ticker symbol.

    Idempotent, so it is safe to apply at every layer; cache keys never
    fragment by case or surrounding whitespace. ``None`` becomes ``""``.
    """
    return (symbol or "").strip().upper()
