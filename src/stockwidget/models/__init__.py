"""Stock widget models."""

from stockwidget.models.history import HistoryPoint, HistoryResult, HistoryStatus
from stockwidget.models.quote import PLACEHOLDER, Quote, QuoteStatus

__all__ = [
    "PLACEHOLDER",
    "Quote",
    "QuoteStatus",
    "HistoryPoint",
    "HistoryResult",
    "HistoryStatus",
]
