"""
Use-case: summarise what the store currently holds for the dashboard.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from src.domain.entities.stock_record import DataStats
from src.domain.ports.stock_repository_port import IStockRepository


class GetDataStatsUseCase:
    def __init__(self, repository: IStockRepository) -> None:
        self._repository = repository

    def execute(self) -> DataStats:
        return self._repository.get_stats()

    def has_data(self) -> bool:
        return self._repository.has_stock_data()
