"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

load_into_env() is called once at process startup, before AppConfig reads the
environment and before any SDK that reads LANGFUSE_* or SUPABASE_* variables
is constructed. Values already present in the environment are left alone so a
local .env still wins.
"""

import json
import logging
import os

import boto3

from src.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None) -> None:
        self._client = boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_arn: str) -> dict:
        """Fetch and deserialize a JSON secret by ARN."""
        response = self._client.get_secret_value(SecretId=secret_arn)
        return json.loads(response["SecretString"])

    def load_into_env(self, secret_arn: str) -> None:
        """Inject the key-value pairs of a JSON secret into os.environ."""
        secrets = self.get_secret(secret_arn)
        for key, value in secrets.items():
            os.environ.setdefault(key, str(value))
        logger.info("Loaded %d secret values into the environment", len(secrets))
