"""
Domain entities for uploaded stock price data and the filters that read it.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional


@dataclass(frozen=True)
class StockRecord:
    """One trading day. `date` is an ISO-8601 string and the unique key."""

    date: str
    open: float
    high: float
    low: float
    close: float

    def as_row(self) -> dict:
        return {
            "date": self.date,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }


def latest_per_date(records: Iterable[StockRecord]) -> list[StockRecord]:
    """Collapse records sharing a date so the last occurrence wins.

    First-seen order of dates is kept.
    """
    by_date: dict[str, StockRecord] = {}
    for record in records:
        by_date[record.date] = record
    return list(by_date.values())


class SortKey(str, Enum):
    DATE = "date"
    HIGH = "high"
    LOW = "low"


@dataclass(frozen=True)
class StockFilter:
    """Declarative read over stock_prices: date bounds, ordering and row cap.

    rule:       name of the classifier rule that produced the filter.
    start_date: inclusive ISO lower bound, or None.
    end_date:   inclusive ISO upper bound, or None.
    limit:      maximum number of rows, or None for all matching rows.
    """

    rule: str
    sort_key: SortKey = SortKey.DATE
    descending: bool = True
    limit: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @property
    def has_date_bounds(self) -> bool:
        return self.start_date is not None and self.end_date is not None


@dataclass(frozen=True)
class StockQueryResult:
    """Rows returned for a StockFilter.

    An empty `records` with `error is None` means the store had no matching
    data; a non-None `error` means the read itself failed.
    """

    records: list[StockRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def failure(cls, error: str) -> "StockQueryResult":
        return cls(records=[], error=error)


class QueryType(str, Enum):
    STOCK = "stock"


@dataclass(frozen=True)
class QueryLogEntry:
    query: str
    answer: str
    query_type: QueryType = QueryType.STOCK
    sources: Optional[tuple[str, ...]] = None

    def as_row(self) -> dict:
        return {
            "query": self.query,
            "answer": self.answer,
            "query_type": self.query_type.value,
            "sources": list(self.sources) if self.sources else None,
        }


@dataclass(frozen=True)
class DataStats:
    stock_records: int = 0
    total_queries: int = 0
    transcript_chunks: int = 0
    last_updated: Optional[str] = None
