"""Normalize provider history payloads into ordered chart samples.

Providers return daily closes in one of two shapes:

* a mapping keyed by date, usually newest first (Alpha Vantage), and
* parallel timestamp/close arrays already in chronological order (Finnhub).

Both end up as a list of ``HistoryPoint`` ordered oldest first, holding at
most ``limit`` entries, with null or non-numeric closes dropped.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import pandas as pd

from stockwidget.models.history import HistoryPoint

DEFAULT_LIMIT = 30
LABEL_FORMAT = "%Y-%m-%d"


def points_from_date_mapping(
    series: Mapping[str, Any],
    close_key: str = "4. close",
    limit: int = DEFAULT_LIMIT,
) -> list[HistoryPoint]:
    """Convert a date-keyed mapping of daily records.

    Each value is either a record holding ``close_key`` or a bare close.
    Entries whose date or close cannot be parsed are skipped.
    """
    raw = {
        day: (record.get(close_key) if isinstance(record, Mapping) else record)
        for day, record in series.items()
    }
    closes = pd.Series(list(raw.values()), index=list(raw.keys()), dtype="object")
    closes.index = pd.to_datetime(closes.index, errors="coerce", format="mixed")
    return _to_points(closes, limit)


def points_from_arrays(
    timestamps: Sequence[int | float],
    closes: Sequence[Any],
    limit: int = DEFAULT_LIMIT,
) -> list[HistoryPoint]:
    """Convert parallel epoch-second timestamps and closes.

    Raises:
        ValueError: If the two arrays differ in length.
    """
    if len(timestamps) != len(closes):
        raise ValueError(
            f"Mismatched history arrays: {len(timestamps)} timestamps, {len(closes)} closes"
        )
    series = pd.Series(list(closes), dtype="object")
    series.index = pd.to_datetime(list(timestamps), unit="s", utc=True, errors="coerce")
    return _to_points(series, limit)


def _to_points(closes: pd.Series, limit: int) -> list[HistoryPoint]:
    numeric = pd.to_numeric(closes, errors="coerce")
    numeric = numeric[numeric.index.notna()].dropna()
    numeric = numeric[~numeric.index.duplicated(keep="last")]
    numeric = numeric.sort_index().tail(max(limit, 0))
    return [
        HistoryPoint(label=ts.strftime(LABEL_FORMAT), close=float(value))
        for ts, value in numeric.items()
    ]
