import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIALS_SECRET_ID = "Salesforce-API-Credentials"
DEFAULT_PRIVATE_KEY_SECRET_ID = "Salesforce-Private-SSL-Key"
DEFAULT_REGION = "us-east-1"
DEFAULT_API_VERSION = "v61.0"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    credentials_secret_id: str = DEFAULT_CREDENTIALS_SECRET_ID
    private_key_secret_id: str = DEFAULT_PRIVATE_KEY_SECRET_ID
    aws_region: str = DEFAULT_REGION
    api_version: str = DEFAULT_API_VERSION
    fallback_instance_url: Optional[str] = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def _log_level(value: str) -> str:
    level = value.strip().upper()
    if level == "WARN":
        return "WARNING"
    if level not in LOG_LEVELS:
        logger.warning("Unknown LOG_LEVEL %r, using %s", value, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from the Lambda environment."""
    env = os.environ if environ is None else environ
    return Settings(
        credentials_secret_id=env.get("SALESFORCE_CREDENTIALS_SECRET_ID", DEFAULT_CREDENTIALS_SECRET_ID),
        private_key_secret_id=env.get("SALESFORCE_PRIVATE_KEY_SECRET_ID", DEFAULT_PRIVATE_KEY_SECRET_ID),
        aws_region=env.get("AWS_REGION", DEFAULT_REGION),
        api_version=env.get("SALESFORCE_API_VERSION", DEFAULT_API_VERSION),
        fallback_instance_url=env.get("SALESFORCE_FALLBACK_INSTANCE_URL") or None,
        http_timeout=float(env.get("HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT)),
        log_level=_log_level(env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL)),
    )
