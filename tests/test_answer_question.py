"""End-to-end tests of the question graph with a fake model and in-memory store."""

import asyncio

import pytest

from src.application.agent.graph import build_question_graph
from src.application.agent.prompts import EMPTY_ANSWER, NO_DATA_CONTEXT, TABLE_PROMPT
from src.application.services.context_assembler import STOCK_SOURCE
from src.application.use_cases.answer_question import AnswerQuestionUseCase
from src.domain.errors import ModelError
from src.infrastructure.observability.langfuse_adapter import NullObservabilityHandler

from conftest import FailingReadRepository, FakeLanguageModel


def _answer(repository, llm, question):
    use_case = AnswerQuestionUseCase(build_question_graph(repository, llm), NullObservabilityHandler())
    return asyncio.run(use_case.execute(question, session_id="s1"))


def test_answer_uses_rows_selected_by_classifier(repository, llm):
    result = _answer(repository, llm, "Show Jan-24 as a table")

    assert result.answer == "Prices rose steadily."
    assert result.sources == (STOCK_SOURCE,)
    system, human = llm.calls[0]
    assert system.content.startswith(TABLE_PROMPT)
    assert "Date: 2024-01-02, Open: 1600.0" in system.content
    assert human.content == "Show Jan-24 as a table"


def test_question_and_answer_are_logged(repository, llm):
    _answer(repository, llm, "latest prices")

    entry = repository.query_log[-1]
    assert entry.query == "latest prices"
    assert entry.answer == "Prices rose steadily."
    assert entry.sources == (STOCK_SOURCE,)


def test_read_failure_still_answers_with_fallback_context(llm):
    result = _answer(FailingReadRepository(), llm, "highest price")

    assert result.answer == "Prices rose steadily."
    assert result.sources == ()
    assert llm.last_system_prompt.endswith(f"Context: {NO_DATA_CONTEXT}")


def test_no_matching_rows_logs_without_sources(repository, llm):
    _answer(repository, llm, "Jan-19")

    assert repository.query_log[-1].sources is None
    assert NO_DATA_CONTEXT in llm.last_system_prompt


def test_blank_model_output_is_replaced(repository):
    result = _answer(repository, FakeLanguageModel(reply="  "), "latest")

    assert result.answer == EMPTY_ANSWER


def test_model_failure_raises_model_error(repository):
    llm = FakeLanguageModel(error=RuntimeError("ThrottlingException: Too many requests"))

    with pytest.raises(ModelError, match="Too many requests"):
        _answer(repository, llm, "latest")
    assert repository.query_log == []
