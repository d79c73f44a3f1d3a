"""
Application service: build the model prompt for a question from the rows the
classifier selected.
"""

from dataclasses import dataclass

from src.application.agent.prompts import ANALYST_PROMPT, NO_DATA_CONTEXT, PERSONAS
from src.domain.entities.stock_record import StockQueryResult

STOCK_SOURCE = "Stock Price Database"


@dataclass(frozen=True)
class PromptContext:
    system_prompt: str
    context: str
    sources: tuple[str, ...] = ()

    @property
    def system_message(self) -> str:
        return f"{self.system_prompt}\n\nContext: {self.context}"


def select_system_prompt(question: str) -> str:
    text = question.lower()
    for keywords, prompt in PERSONAS:
        if any(keyword in text for keyword in keywords):
            return prompt
    return ANALYST_PROMPT


def assemble_context(question: str, result: StockQueryResult) -> PromptContext:
    """Render *result* in filter order, or the no-data sentence when it is empty.

    A failed read renders exactly like an empty one.
    """
    system_prompt = select_system_prompt(question)
    if not result.records:
        return PromptContext(system_prompt=system_prompt, context=NO_DATA_CONTEXT)

    lines = [
        f"Date: {r.date}, Open: {r.open}, High: {r.high}, Low: {r.low}, Close: {r.close}"
        for r in result.records
    ]
    context = "Stock Price Data:\n" + "\n".join(lines)
    return PromptContext(
        system_prompt=system_prompt,
        context=context,
        sources=(STOCK_SOURCE,),
    )
