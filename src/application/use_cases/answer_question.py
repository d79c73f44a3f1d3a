"""
Use-case: answer one user question through the compiled question graph.
langchain_core/langgraph configs are treated as framework (not infrastructure)
because LangGraph is the orchestration framework used throughout the application layer.
"""

from typing import Any, Optional

from src.domain.entities.conversation import AnswerResult
from src.domain.ports.observability_port import IObservabilityHandler


class AnswerQuestionUseCase:
    def __init__(self, graph: Any, observability: IObservabilityHandler) -> None:
        """
        Args:
            graph:         Compiled LangGraph StateGraph returned by build_question_graph().
            observability: IObservabilityHandler implementation (e.g. Langfuse adapter).
        """
        self._graph = graph
        self._observability = observability

    async def execute(self, question: str, session_id: Optional[str] = None) -> AnswerResult:
        """Run the pipeline for *question*.

        Raises:
            ModelError: if the language model call fails. Read and log failures
                        never reach the caller.
        """
        callback = self._observability.as_callback()
        config = {
            "callbacks": [callback] if callback is not None else [],
            "metadata": {
                "langfuse_session_id": session_id,
                "langfuse_tags": ["stock-chat"],
            },
        }
        state = await self._graph.ainvoke({"question": question}, config=config)
        return AnswerResult(answer=state["answer"], sources=tuple(state.get("sources", ())))
