"""
LangGraph state for the question pipeline.
langgraph is the orchestration framework and is allowed in the application layer.
"""

from typing import TypedDict

from src.domain.entities.stock_record import StockFilter, StockQueryResult


class QuestionState(TypedDict, total=False):
    """Values threaded through retrieve -> generate -> record.

    question:     the user's text, as submitted.
    stock_filter: filter chosen by the query classifier.
    result:       rows read for the filter (possibly a failed read).
    sources:      labels of the data sources that fed the context.
    answer:       model output, never empty.
    logged:       whether the question/answer pair reached user_queries.
    """

    question: str
    stock_filter: StockFilter
    result: StockQueryResult
    sources: tuple[str, ...]
    answer: str
    logged: bool
