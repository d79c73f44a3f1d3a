"""
Infrastructure adapter: Supabase (PostgREST) → IStockRepository.
All supabase-py details are confined here; the rest of the codebase depends
only on IStockRepository.

Tables:
  stock_prices(date PK, open, high, low, close, created_at)
  user_queries(query, answer, query_type, sources, created_at)
  transcript_chunks(id, created_at)   -- counted and pinged, never read
"""

import logging
from typing import Any, Optional, Sequence

from supabase import Client, create_client

from src.domain.entities.stock_record import (
    DataStats,
    QueryLogEntry,
    StockFilter,
    StockQueryResult,
    StockRecord,
    latest_per_date,
)
from src.domain.errors import BackendReadError, BackendWriteError
from src.domain.ports.stock_repository_port import IStockRepository

logger = logging.getLogger(__name__)

STOCK_TABLE = "stock_prices"
QUERY_TABLE = "user_queries"
TRANSCRIPT_TABLE = "transcript_chunks"


class SupabaseStockRepository(IStockRepository):
    """Stock prices and query logs stored in a hosted Supabase project."""

    def __init__(self, client: Client) -> None:
        self._client = client

    @classmethod
    def from_credentials(cls, url: str, key: str) -> "SupabaseStockRepository":
        return cls(create_client(url, key))

    # ------------------------------------------------------------------
    # IStockRepository interface
    # ------------------------------------------------------------------

    def upsert_stock_records(self, records: Sequence[StockRecord]) -> int:
        # Postgres rejects a batch that touches the same conflict key twice.
        rows = [r.as_row() for r in latest_per_date(records)]
        if not rows:
            return 0
        try:
            self._client.table(STOCK_TABLE).upsert(rows, on_conflict="date").execute()
        except Exception as exc:
            raise BackendWriteError(str(exc)) from exc
        logger.info("Upserted %d rows into %s", len(rows), STOCK_TABLE)
        return len(rows)

    def query_stock_records(self, stock_filter: StockFilter) -> StockQueryResult:
        query = self._client.table(STOCK_TABLE).select("*")
        if stock_filter.has_date_bounds:
            query = query.gte("date", stock_filter.start_date).lte("date", stock_filter.end_date)
        query = query.order(stock_filter.sort_key.value, desc=stock_filter.descending)
        if stock_filter.limit is not None:
            query = query.limit(stock_filter.limit)
        try:
            records = [self._to_record(row) for row in self._read(query)]
        except BackendReadError as exc:
            logger.warning("Error querying stock data: %s", exc)
            return StockQueryResult.failure(str(exc))
        return StockQueryResult(records=records)

    def log_query(self, entry: QueryLogEntry) -> bool:
        try:
            self._client.table(QUERY_TABLE).insert(entry.as_row()).execute()
        except Exception as exc:
            logger.warning("Error saving query to database: %s", exc)
            return False
        return True

    def has_stock_data(self) -> bool:
        try:
            rows = self._read(self._client.table(STOCK_TABLE).select("date").limit(1))
        except BackendReadError as exc:
            logger.warning("Error checking data availability: %s", exc)
            return False
        return bool(rows)

    def get_stats(self) -> DataStats:
        try:
            stock_count = self._count(STOCK_TABLE, "date")
            query_count = self._count(QUERY_TABLE, "created_at")
            transcript_count = self._count(TRANSCRIPT_TABLE, "id")
            timestamps = [
                self._latest_created_at(TRANSCRIPT_TABLE),
                self._latest_created_at(STOCK_TABLE),
            ]
        except BackendReadError as exc:
            logger.warning("Error fetching stats: %s", exc)
            return DataStats()
        present = [t for t in timestamps if t]
        return DataStats(
            stock_records=stock_count,
            total_queries=query_count,
            transcript_chunks=transcript_count,
            last_updated=max(present) if present else None,
        )

    def ping(self) -> bool:
        try:
            self._read(self._client.table(TRANSCRIPT_TABLE).select("id").limit(1))
        except BackendReadError as exc:
            logger.warning("Supabase connection failed: %s", exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _read(query: Any) -> list[dict]:
        try:
            response = query.execute()
        except Exception as exc:
            raise BackendReadError(str(exc)) from exc
        return response.data or []

    def _count(self, table: str, column: str) -> int:
        try:
            response = self._client.table(table).select(column, count="exact").execute()
        except Exception as exc:
            raise BackendReadError(str(exc)) from exc
        return response.count or 0

    def _latest_created_at(self, table: str) -> Optional[str]:
        rows = self._read(
            self._client.table(table).select("created_at").order("created_at", desc=True).limit(1)
        )
        return rows[0].get("created_at") if rows else None

    @staticmethod
    def _to_record(row: dict) -> StockRecord:
        try:
            return StockRecord(
                date=str(row["date"]),
                open=float(row["open"]),
                high=float(row["high"]),
                low=float(row["low"]),
                close=float(row["close"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise BackendReadError(f"Malformed stock_prices row {row!r}: {exc}") from exc
