"""
Infrastructure adapter: Amazon Bedrock (ChatBedrock + Titan embeddings) → ILanguageModel.

All ChatBedrock / langchain_aws details are confined here. Generation settings
are fixed per process: one chat completion per question, no retries.
"""

import os
from typing import Any, Optional

from langchain_aws import BedrockEmbeddings, ChatBedrock

from src.domain.ports.llm_port import ILanguageModel


class BedrockChatAdapter(ILanguageModel):
    """Wraps ChatBedrock and BedrockEmbeddings behind the ILanguageModel interface."""

    MODEL_ID = "us.amazon.nova-pro-v1:0"
    EMBEDDING_MODEL_ID = "amazon.titan-embed-text-v2:0"
    TEMPERATURE = 0.7
    MAX_TOKENS = 1500

    def __init__(self, model_id: Optional[str] = None, region: Optional[str] = None) -> None:
        region_name = region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1")
        self._llm = ChatBedrock(
            model=model_id or self.MODEL_ID,
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
            region_name=region_name,
        )
        self._embedding = BedrockEmbeddings(
            model_id=self.EMBEDDING_MODEL_ID,
            region_name=region_name,
        )

    def invoke(self, messages: list[Any], config: Optional[dict] = None) -> Any:
        return self._llm.invoke(messages, config=config)

    def embed(self, text: str) -> list[float]:
        return self._embedding.embed_query(text)
