"""
Domain entities for a chat session's conversation history.
Zero external dependencies: pure Python dataclasses only.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationMessage:
    role: Role
    content: str
    sources: Optional[tuple[str, ...]] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of the question pipeline for one question."""

    answer: str
    sources: tuple[str, ...] = ()
