"""Shared fakes and fixtures for the test suite."""

from typing import Any, Optional

import pytest
from langchain_core.messages import AIMessage

from src.domain.entities.stock_record import StockFilter, StockQueryResult, StockRecord
from src.domain.ports.llm_port import ILanguageModel
from src.infrastructure.persistence.in_memory_repository import InMemoryStockRepository


class FakeLanguageModel(ILanguageModel):
    """Records every call and answers with a canned reply, or raises *error*."""

    def __init__(self, reply: str = "Prices rose steadily.", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[list[Any]] = []

    def invoke(self, messages: list[Any], config: Optional[dict] = None) -> Any:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)

    def embed(self, text: str) -> list[float]:
        return [float(len(text))]

    @property
    def last_system_prompt(self) -> str:
        return self.calls[-1][0].content


class FailingReadRepository(InMemoryStockRepository):
    """Store whose reads and log writes fail the way a dropped backend would."""

    def query_stock_records(self, stock_filter: StockFilter) -> StockQueryResult:
        return StockQueryResult.failure("connection refused")

    def log_query(self, entry) -> bool:
        return False


JANUARY = [
    StockRecord(date="2024-01-02", open=1600.0, high=1620.0, low=1590.0, close=1610.0),
    StockRecord(date="2024-01-03", open=1610.0, high=1655.0, low=1605.0, close=1650.0),
    StockRecord(date="2024-01-04", open=1650.0, high=1660.0, low=1580.0, close=1585.0),
]


@pytest.fixture
def repository() -> InMemoryStockRepository:
    repo = InMemoryStockRepository()
    repo.upsert_stock_records(JANUARY)
    return repo


@pytest.fixture
def llm() -> FakeLanguageModel:
    return FakeLanguageModel()
