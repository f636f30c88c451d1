"""
Lambda entry point for form-builder webhooks.

Extracts the applicant from the submission, authenticates to Salesforce with
the JWT-bearer grant and inserts a Lead. Failures are logged by the stage that
hit them and propagate, so Lambda marks the invocation as failed.
"""
import json
import logging

from .config import load_settings
from .field_extractor import extract_client_data, parse_questions
from .lead_submitter import submit_lead
from .secrets_store import SecretStore
from .token_exchange import exchange_token

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Client Loaded to Salesforce Successfully!"


def lambda_handler(event, context, secret_store=None, http=None):
    """
    Handle an incoming form submission.

    Args:
        event: API Gateway event containing the submission payload
        context: Lambda context object
        secret_store: SecretStore to read credentials from (built from settings if omitted)
        http: Object exposing ``post`` like the ``requests`` module

    Returns:
        dict: API Gateway response
    """
    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level)
    logger.info("Triggered")

    # Form data first so a bad submission never reaches Salesforce
    questions = parse_questions(event)
    client_data = extract_client_data(questions)
    logger.info("Extracted all form data")

    store = secret_store or SecretStore(region_name=settings.aws_region)
    credentials = store.get_credentials(settings.credentials_secret_id, settings.private_key_secret_id)

    token = exchange_token(credentials, http=http, timeout=settings.http_timeout)
    logger.info("Retrieved Salesforce access token")

    submit_lead(
        client_data,
        token,
        fallback_instance_url=settings.fallback_instance_url,
        api_version=settings.api_version,
        http=http,
        timeout=settings.http_timeout,
    )
    logger.info("Passed insert lead")

    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(SUCCESS_MESSAGE),
    }
