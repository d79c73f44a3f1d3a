"""
Port (interface) for the stock price store.
Infrastructure adapters (e.g. SupabaseStockRepository) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from src.domain.entities.stock_record import (
    DataStats,
    QueryLogEntry,
    StockFilter,
    StockQueryResult,
    StockRecord,
)


class IStockRepository(ABC):
    @abstractmethod
    def upsert_stock_records(self, records: Sequence[StockRecord]) -> int:
        """Insert or overwrite records keyed by date. Returns the number written.

        Raises:
            BackendWriteError: if the backend rejects the write.
        """
        ...

    @abstractmethod
    def query_stock_records(self, stock_filter: StockFilter) -> StockQueryResult:
        """Read the rows selected by *stock_filter*. Never raises."""
        ...

    @abstractmethod
    def log_query(self, entry: QueryLogEntry) -> bool:
        """Persist a question/answer pair. Returns False instead of raising on failure."""
        ...

    @abstractmethod
    def has_stock_data(self) -> bool: ...

    @abstractmethod
    def get_stats(self) -> DataStats: ...

    @abstractmethod
    def ping(self) -> bool:
        """Return True when the backend answers a trivial read."""
        ...
