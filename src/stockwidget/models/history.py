"""Daily closing-price history data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class HistoryStatus(Enum):
    """Outcome of a history lookup."""

    OK = "ok"
    RATE_LIMITED = "rate_limited"
    NO_DATA = "no_data"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class HistoryPoint:
    """One chart sample.

    Attributes:
        label: Trading date, ``YYYY-MM-DD``.
        close: Closing price for that date.
    """

    label: str
    close: float


@dataclass(frozen=True)
class HistoryResult:
    """Ordered daily closes (oldest first) or the reason there are none."""

    symbol: str
    status: HistoryStatus
    points: list[HistoryPoint] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is HistoryStatus.OK

    @property
    def labels(self) -> list[str]:
        return [p.label for p in self.points]

    @property
    def values(self) -> list[float]:
        return [p.close for p in self.points]
