"""
Per-session conversation state.

A ChatSession owns the ordered message history and the busy flag for one
browser session. Only one question may be in flight per session: the busy
flag is checked and set before the first await, so on a single event loop a
second submission always sees it and is dropped rather than queued.
"""

import logging
from typing import Optional

from src.application.services.error_messages import describe_failure
from src.application.use_cases.answer_question import AnswerQuestionUseCase
from src.domain.entities.conversation import ConversationMessage, Role

logger = logging.getLogger(__name__)


class ChatSession:
    def __init__(self, session_id: str, answer_use_case: AnswerQuestionUseCase) -> None:
        self.session_id = session_id
        self._answer_use_case = answer_use_case
        self._messages: list[ConversationMessage] = []
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def messages(self) -> tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    async def submit(self, question: str) -> Optional[ConversationMessage]:
        """Ask *question* and return the assistant reply.

        Returns None without touching the history when the question is blank
        or another question is still in flight.
        """
        if not question.strip() or self._busy:
            return None

        self._busy = True
        self._messages.append(ConversationMessage(role=Role.USER, content=question.strip()))
        try:
            result = await self._answer_use_case.execute(question, session_id=self.session_id)
            reply = ConversationMessage(
                role=Role.ASSISTANT,
                content=result.answer,
                sources=tuple(dict.fromkeys(result.sources)) or None,
            )
        except Exception as exc:
            logger.error("Question failed in session %s: %s", self.session_id, exc)
            reply = ConversationMessage(role=Role.ASSISTANT, content=describe_failure(exc))
        finally:
            self._busy = False

        self._messages.append(reply)
        return reply


class SessionRegistry:
    """Holds one ChatSession per session id for the lifetime of the process."""

    def __init__(self, answer_use_case: AnswerQuestionUseCase) -> None:
        self._answer_use_case = answer_use_case
        self._sessions: dict[str, ChatSession] = {}

    def get(self, session_id: str) -> ChatSession:
        session = self._sessions.get(session_id)
        if session is None:
            session = ChatSession(session_id, self._answer_use_case)
            self._sessions[session_id] = session
        return session
