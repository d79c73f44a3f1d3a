"""
LangGraph question pipeline factory.

Dependency-injection contract:
  - Receives IStockRepository and ILanguageModel.
  - Never imports supabase, langchain_aws, langfuse, or boto3 directly.
  - langchain_core and langgraph are treated as orchestration-framework imports,
    acceptable in the application layer.

The graph is a straight line: retrieve -> generate -> record. A failed read
degrades to the no-data context, a failed log write is ignored, and a failed
model call raises ModelError out of the graph.
"""

import logging

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, START, StateGraph

from src.application.agent.prompts import EMPTY_ANSWER
from src.application.agent.state import QuestionState
from src.application.services.context_assembler import assemble_context
from src.application.services.query_classifier import classify_question
from src.domain.entities.stock_record import QueryLogEntry, QueryType
from src.domain.errors import ModelError
from src.domain.ports.llm_port import ILanguageModel
from src.domain.ports.stock_repository_port import IStockRepository

logger = logging.getLogger(__name__)


def build_question_graph(repository: IStockRepository, llm: ILanguageModel):
    """Build and compile the question pipeline.

    Args:
        repository: IStockRepository implementation used for reads and query logs.
        llm:        ILanguageModel implementation, injected, no direct SDK reference.

    Returns:
        Compiled LangGraph CompiledStateGraph ready for ainvoke() calls.
    """

    def retrieve_node(state: QuestionState) -> dict:
        stock_filter = classify_question(state["question"])
        result = repository.query_stock_records(stock_filter)
        if result.failed:
            logger.warning(
                "Stock read failed for rule %r, answering without data: %s",
                stock_filter.rule,
                result.error,
            )
        return {"stock_filter": stock_filter, "result": result}

    def generate_node(state: QuestionState, config: RunnableConfig) -> dict:
        prompt = assemble_context(state["question"], state["result"])
        messages = [
            SystemMessage(content=prompt.system_message),
            HumanMessage(content=state["question"]),
        ]
        try:
            response = llm.invoke(messages, config=config)
        except Exception as exc:
            logger.error("Language model call failed: %s", exc)
            raise ModelError(str(exc)) from exc
        content = getattr(response, "content", response)
        answer = content if isinstance(content, str) and content.strip() else EMPTY_ANSWER
        return {"answer": answer, "sources": prompt.sources}

    def record_node(state: QuestionState) -> dict:
        entry = QueryLogEntry(
            query=state["question"],
            answer=state["answer"],
            query_type=QueryType.STOCK,
            sources=state["sources"] or None,
        )
        return {"logged": repository.log_query(entry)}

    workflow = StateGraph(QuestionState)
    workflow.add_node("retrieve", retrieve_node)
    workflow.add_node("generate", generate_node)
    workflow.add_node("record", record_node)
    workflow.add_edge(START, "retrieve")
    workflow.add_edge("retrieve", "generate")
    workflow.add_edge("generate", "record")
    workflow.add_edge("record", END)
    return workflow.compile()
