"""
Infrastructure adapter: process memory → IStockRepository.

Used when no Supabase project is configured, and by the test suite. Data is
lost when the process exits. Rows are kept in a dict keyed by date, so an
upsert of an existing date overwrites it in place.
"""

import threading
from datetime import datetime, timezone
from typing import Sequence

from src.domain.entities.stock_record import (
    DataStats,
    QueryLogEntry,
    StockFilter,
    StockQueryResult,
    StockRecord,
)
from src.domain.ports.stock_repository_port import IStockRepository


class InMemoryStockRepository(IStockRepository):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, StockRecord] = {}
        self._created_at: dict[str, str] = {}
        self.query_log: list[QueryLogEntry] = []

    def upsert_stock_records(self, records: Sequence[StockRecord]) -> int:
        now = datetime.now(timezone.utc).isoformat()
        with self._lock:
            for record in records:
                self._records[record.date] = record
                self._created_at[record.date] = now
        return len(records)

    def query_stock_records(self, stock_filter: StockFilter) -> StockQueryResult:
        with self._lock:
            rows = list(self._records.values())
        if stock_filter.has_date_bounds:
            rows = [
                r for r in rows
                if stock_filter.start_date <= r.date <= stock_filter.end_date
            ]
        rows.sort(key=lambda r: getattr(r, stock_filter.sort_key.value), reverse=stock_filter.descending)
        if stock_filter.limit is not None:
            rows = rows[: stock_filter.limit]
        return StockQueryResult(records=rows)

    def log_query(self, entry: QueryLogEntry) -> bool:
        with self._lock:
            self.query_log.append(entry)
        return True

    def has_stock_data(self) -> bool:
        return bool(self._records)

    def get_stats(self) -> DataStats:
        with self._lock:
            return DataStats(
                stock_records=len(self._records),
                total_queries=len(self.query_log),
                transcript_chunks=0,
                last_updated=max(self._created_at.values()) if self._created_at else None,
            )

    def ping(self) -> bool:
        return True
