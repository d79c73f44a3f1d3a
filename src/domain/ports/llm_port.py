"""
Port (interface) for language model providers.
Infrastructure adapters (e.g. BedrockChatAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class ILanguageModel(ABC):
    @abstractmethod
    def invoke(self, messages: list[Any], config: Optional[dict] = None) -> Any:
        """Invoke the model synchronously and return a response message."""
        ...

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Return the embedding vector for *text*."""
        ...
