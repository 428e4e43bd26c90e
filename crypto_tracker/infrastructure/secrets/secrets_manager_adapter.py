"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

load_into_env() is called once at Lambda cold start, before Settings is read
by the service container, so API keys (Vonage, Twitter) and Cognito ids can
live in a single JSON secret instead of plain environment variables.
"""

import json
import logging
import os

import boto3

from crypto_tracker.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None, client=None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_arn: str) -> dict:
        """Fetch and deserialize a JSON secret by ARN."""
        response = self._client.get_secret_value(SecretId=secret_arn)
        return json.loads(response["SecretString"])

    def load_into_env(self, secret_arn: str) -> None:
        """Inject all key-value pairs of a JSON secret into os.environ.

        Keys are upper-cased so they match the Settings field names
        (vonage_api_key is read from VONAGE_API_KEY). Existing variables are
        overwritten.
        """
        secrets = self.get_secret(secret_arn)
        for key, value in secrets.items():
            os.environ[key.upper()] = str(value)
        logger.info("Loaded %d secret values into the environment", len(secrets))
