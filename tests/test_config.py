import pytest

from salesforce_intake.config import Settings, load_settings


def test_defaults():
    settings = load_settings({})
    assert settings == Settings()
    assert settings.credentials_secret_id == "Salesforce-API-Credentials"
    assert settings.private_key_secret_id == "Salesforce-Private-SSL-Key"
    assert settings.api_version == "v61.0"
    assert settings.fallback_instance_url is None
    assert settings.http_timeout == 10.0


def test_overrides():
    settings = load_settings({
        "SALESFORCE_CREDENTIALS_SECRET_ID": "arn:aws:secretsmanager:us-east-1:123456789012:secret:creds",
        "AWS_REGION": "us-west-2",
        "SALESFORCE_FALLBACK_INSTANCE_URL": "https://sandbox.my.salesforce.com",
        "HTTP_TIMEOUT_SECONDS": "3.5",
        "LOG_LEVEL": "debug",
    })
    assert settings.credentials_secret_id.endswith(":secret:creds")
    assert settings.aws_region == "us-west-2"
    assert settings.fallback_instance_url == "https://sandbox.my.salesforce.com"
    assert settings.http_timeout == 3.5
    assert settings.log_level == "DEBUG"


def test_empty_fallback_is_unset():
    assert load_settings({"SALESFORCE_FALLBACK_INSTANCE_URL": ""}).fallback_instance_url is None


def test_bad_timeout():
    with pytest.raises(ValueError):
        load_settings({"HTTP_TIMEOUT_SECONDS": "soon"})


@pytest.mark.parametrize("value,expected", [
    ("verbose", "INFO"),
    ("", "INFO"),
    ("warn", "WARNING"),
    (" error ", "ERROR"),
])
def test_log_level_normalized(value, expected):
    assert load_settings({"LOG_LEVEL": value}).log_level == expected


def test_default_api_version_shared():
    from salesforce_intake import config, lead_submitter

    assert lead_submitter.DEFAULT_API_VERSION is config.DEFAULT_API_VERSION
