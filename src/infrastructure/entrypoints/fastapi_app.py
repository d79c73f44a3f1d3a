"""
FastAPI entry point: composition root for the dashboard backend.

Wires configuration, logging and every infrastructure adapter once at
startup and hands them to create_app().

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

from src.infrastructure.config.wiring import load_secrets  # noqa: E402

# Must run before AppConfig reads the environment.
load_secrets()

from src.infrastructure.config.logging_setup import configure_logging  # noqa: E402
from src.infrastructure.config.settings import AppConfig  # noqa: E402
from src.infrastructure.config.wiring import build_observability, build_repository  # noqa: E402
from src.infrastructure.entrypoints.api import create_app  # noqa: E402
from src.infrastructure.llm.bedrock_adapter import BedrockChatAdapter  # noqa: E402

# ---------------------------------------------------------------------------
# Composition Root: wire all dependencies once at startup
# ---------------------------------------------------------------------------
_config = AppConfig.from_env()
configure_logging(_config.log_level)

_repository = build_repository(_config)
_llm = BedrockChatAdapter(model_id=_config.bedrock_model_id, region=_config.aws_region)
_observability = build_observability(_config)

app = create_app(_repository, _llm, _observability)

