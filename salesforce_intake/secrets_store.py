"""
Salesforce credentials from AWS Secrets Manager.

Two secrets are read on every invocation: a JSON blob holding the connected
app's consumer key, the integration username and the login URL, and the raw
PEM private key used to sign the JWT assertion.
"""
import json
import logging
from dataclasses import dataclass

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import RetrievalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    consumer_key: str
    private_key: str
    username: str
    login_url: str

    def __repr__(self):
        return (f"Credentials(consumer_key={self.consumer_key!r}, private_key='***', "
                f"username={self.username!r}, login_url={self.login_url!r})")


class SecretStore:
    """Reads Salesforce secrets through a boto3 ``secretsmanager`` client."""

    def __init__(self, client=None, region_name=None):
        self._client = client or boto3.client("secretsmanager", region_name=region_name)

    def get_secret_string(self, secret_id: str) -> str:
        try:
            response = self._client.get_secret_value(SecretId=secret_id)
        except (ClientError, BotoCoreError) as e:
            logger.error("Error retrieving secret %s: %s", secret_id, e)
            raise RetrievalError(f"Could not read secret {secret_id}: {e}", secret_id=secret_id) from e

        value = response.get("SecretString")
        if not value:
            logger.error("Secret %s is empty or undefined", secret_id)
            raise RetrievalError(f"Secret String for {secret_id} is empty or undefined", secret_id=secret_id)

        logger.info("Received response for secret %s", secret_id)
        return value

    def get_credentials(self, credentials_id: str, private_key_id: str) -> Credentials:
        raw = self.get_secret_string(credentials_id)
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.error("Secret %s is not valid JSON", credentials_id)
            raise RetrievalError(f"Secret {credentials_id} is not valid JSON", secret_id=credentials_id) from e

        if not isinstance(data, dict):
            raise RetrievalError(f"Secret {credentials_id} is not a JSON object", secret_id=credentials_id)

        missing = [k for k in ("consumerKey", "username", "loginUrl") if not data.get(k)]
        if missing:
            logger.error("Secret %s is missing %s", credentials_id, ", ".join(missing))
            raise RetrievalError(
                f"Secret {credentials_id} is missing {', '.join(missing)}", secret_id=credentials_id
            )

        private_key = self.get_secret_string(private_key_id)

        return Credentials(
            consumer_key=data["consumerKey"],
            private_key=private_key,
            username=data["username"],
            login_url=data["loginUrl"],
        )
