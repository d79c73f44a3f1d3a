"""
Process configuration read from environment variables.

The composition roots call load_dotenv() (and, when APP_SECRET_ARN is set, the
Secrets Manager bootstrap) before AppConfig.from_env(), so values may come from
the shell, a local .env file, or a JSON secret.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class AppConfig:
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    aws_region: str = "us-east-1"
    bedrock_model_id: Optional[str] = None
    log_level: str = "INFO"
    langfuse_public_key: Optional[str] = None
    langfuse_secret_key: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        return cls(
            supabase_url=env.get("SUPABASE_URL") or None,
            supabase_key=env.get("SUPABASE_KEY") or env.get("SUPABASE_ANON_KEY") or None,
            aws_region=env.get("AWS_DEFAULT_REGION", "us-east-1"),
            bedrock_model_id=env.get("BEDROCK_MODEL_ID") or None,
            log_level=env.get("LOG_LEVEL", "INFO"),
            langfuse_public_key=env.get("LANGFUSE_PUBLIC_KEY") or None,
            langfuse_secret_key=env.get("LANGFUSE_SECRET_KEY") or None,
        )

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def langfuse_configured(self) -> bool:
        return bool(self.langfuse_public_key and self.langfuse_secret_key)
