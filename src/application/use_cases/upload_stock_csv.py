"""
Use-case: parse an uploaded stock CSV and upsert its rows.
Depends only on Domain ports and application services: no infrastructure imports.
"""

import logging

from src.application.services.csv_normalizer import parse_stock_csv
from src.domain.ports.stock_repository_port import IStockRepository

logger = logging.getLogger(__name__)


class UploadStockCsvUseCase:
    def __init__(self, repository: IStockRepository) -> None:
        self._repository = repository

    def execute(self, csv_text: str) -> int:
        """Parse *csv_text* and upsert the records. Returns the number of parsed records.

        Raises:
            ParseError:        if the CSV has no usable rows.
            BackendWriteError: if the store rejects the upsert.
        """
        records = parse_stock_csv(csv_text)
        logger.info("Parsed %d stock records", len(records))
        self._repository.upsert_stock_records(records)
        return len(records)
