import json
from unittest import mock

import boto3
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from salesforce_intake.secrets_store import Credentials
from salesforce_intake.token_exchange import AccessToken

LOGIN_URL = "https://login.salesforce.com"
INSTANCE_URL = "https://example.my.salesforce.com"


@pytest.fixture(autouse=True)
def aws_env(monkeypatch):
    """Keep boto3 and settings away from the real environment."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for name in (
        "SALESFORCE_CREDENTIALS_SECRET_ID",
        "SALESFORCE_PRIVATE_KEY_SECRET_ID",
        "SALESFORCE_API_VERSION",
        "SALESFORCE_FALLBACK_INSTANCE_URL",
        "HTTP_TIMEOUT_SECONDS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def rsa_keypair():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


@pytest.fixture
def credentials(rsa_keypair):
    return Credentials(
        consumer_key="3MVG9-consumer-key",
        private_key=rsa_keypair[0],
        username="integration@example.org",
        login_url=LOGIN_URL,
    )


@pytest.fixture
def token():
    return AccessToken(
        access_token="00Dxx!token",
        instance_url=INSTANCE_URL,
        id=f"{LOGIN_URL}/id/00Dxx/005xx",
        token_type="Bearer",
    )


@pytest.fixture
def secretsmanager():
    return boto3.client("secretsmanager", region_name="us-east-1")


def make_questions(**overrides):
    """A complete question list; pass a label with None to drop it."""
    answers = {
        "First Name": "Jane",
        "Last Name": "Doe",
        "Email": "jane@example.com",
        "Phone": "512-555-0100",
        "Your address": {
            "address": "1 Main St",
            "city": "Austin",
            "state": "Texas",
            "zipcode": "78701",
        },
        "Primary Language": "Spanish",
        "Number of family members in your household": 4,
        "Estimated Monthly Household Income": 3200,
    }
    answers.update(overrides)
    return [{"name": name, "value": value} for name, value in answers.items() if value is not None]


def make_event(questions):
    return {"body": json.dumps({"submission": {"questions": questions}})}


def http_response(status_code=200, payload=None, text=None):
    response = mock.Mock()
    response.status_code = status_code
    response.text = text if text is not None else json.dumps(payload or {})
    if payload is None:
        response.json.side_effect = ValueError("no JSON")
    else:
        response.json.return_value = payload
    return response
