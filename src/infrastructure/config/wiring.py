"""
Adapter selection shared by the FastAPI app and the ingestion CLI.
"""

import logging
import os

from src.domain.ports.observability_port import IObservabilityHandler
from src.domain.ports.stock_repository_port import IStockRepository
from src.infrastructure.config.settings import AppConfig
from src.infrastructure.observability.langfuse_adapter import (
    LangfuseObservabilityHandler,
    NullObservabilityHandler,
)
from src.infrastructure.persistence.in_memory_repository import InMemoryStockRepository

logger = logging.getLogger(__name__)


def load_secrets() -> None:
    """Pull APP_SECRET_ARN from Secrets Manager into os.environ, if set."""
    secret_arn = os.environ.get("APP_SECRET_ARN")
    if secret_arn:
        from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter
        SecretsManagerAdapter().load_into_env(secret_arn)


def build_repository(config: AppConfig) -> IStockRepository:
    if not config.supabase_configured:
        logger.warning(
            "SUPABASE_URL / SUPABASE_KEY missing, using in-memory store (data is not persisted)"
        )
        return InMemoryStockRepository()
    from src.infrastructure.persistence.supabase_repository import SupabaseStockRepository
    return SupabaseStockRepository.from_credentials(config.supabase_url, config.supabase_key)


def build_observability(config: AppConfig) -> IObservabilityHandler:
    if config.langfuse_configured:
        return LangfuseObservabilityHandler()
    return NullObservabilityHandler()
