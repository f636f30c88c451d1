"""
OAuth2 JWT-bearer token exchange against Salesforce.

A short-lived RS256 assertion is signed with the connected app's private key
and posted to ``{loginUrl}/services/oauth2/token``. The access token is used
once for the lead insert and is not cached.
"""
import logging
import time
from dataclasses import dataclass
from typing import Optional

import requests
from jose import jwt
from jose.exceptions import JOSEError

from .errors import AuthError

logger = logging.getLogger(__name__)

GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"
TOKEN_PATH = "/services/oauth2/token"
ASSERTION_LIFETIME = 180  # seconds
SIGNING_ALGORITHM = "RS256"


@dataclass(frozen=True)
class AccessToken:
    access_token: str
    instance_url: Optional[str] = None
    id: Optional[str] = None
    token_type: Optional[str] = None
    issued_at: Optional[str] = None
    signature: Optional[str] = None
    scope: Optional[str] = None

    @classmethod
    def from_response(cls, data: dict) -> "AccessToken":
        if not isinstance(data, dict) or not data.get("access_token"):
            raise AuthError("Token response did not include an access_token")
        return cls(
            access_token=data["access_token"],
            instance_url=data.get("instance_url") or None,
            id=data.get("id"),
            token_type=data.get("token_type"),
            issued_at=data.get("issued_at"),
            signature=data.get("signature"),
            scope=data.get("scope"),
        )

    def __repr__(self):
        return (f"AccessToken(access_token='***', instance_url={self.instance_url!r}, "
                f"token_type={self.token_type!r})")


def _unescape_key(private_key: str) -> str:
    # stored keys carry literal "\n" escapes instead of newlines
    return private_key.replace("\\n", "\n")


def build_assertion(credentials, now: Optional[float] = None) -> str:
    """
    Build and sign the JWT assertion for the bearer grant.

    Args:
        credentials: Credentials fetched from the secret store
        now: Epoch seconds to use as the issue time (defaults to the clock)

    Returns:
        str: Compact RS256-signed JWT
    """
    issued_at = int(time.time() if now is None else now)
    claims = {
        "iss": credentials.consumer_key,
        "sub": credentials.username,
        "aud": credentials.login_url,
        "iat": issued_at,
        "exp": issued_at + ASSERTION_LIFETIME,
    }
    try:
        return jwt.encode(claims, _unescape_key(credentials.private_key), algorithm=SIGNING_ALGORITHM)
    except JOSEError as e:
        logger.error("Error signing Salesforce JWT assertion: %s", e)
        raise AuthError(f"Could not sign JWT assertion: {e}") from e


def exchange_token(credentials, http=None, timeout: Optional[float] = None) -> AccessToken:
    """
    Exchange a signed assertion for a Salesforce access token.

    Args:
        credentials: Credentials fetched from the secret store
        http: Object exposing ``post`` like the ``requests`` module (defaults to it)
        timeout: Request timeout in seconds

    Returns:
        AccessToken: Token plus the instance URL to call
    """
    http = http or requests
    assertion = build_assertion(credentials)
    url = f"{credentials.login_url.rstrip('/')}{TOKEN_PATH}"
    logger.info("Requesting Salesforce access token from %s for %s", credentials.login_url, credentials.username)

    try:
        response = http.post(
            url,
            data={"grant_type": GRANT_TYPE, "assertion": assertion},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.error("Error retrieving Salesforce access token: %s", e)
        raise AuthError(f"Token request to {url} failed: {e}") from e

    if not 200 <= response.status_code < 300:
        body = (response.text or "")[:500]
        logger.error("Salesforce token endpoint returned %s: %s", response.status_code, body)
        raise AuthError(
            f"Token request failed with status {response.status_code}",
            status_code=response.status_code,
            body=body,
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Salesforce token response was not JSON")
        raise AuthError("Token response was not valid JSON", status_code=response.status_code) from e

    token = AccessToken.from_response(data)
    logger.info("Received response for Salesforce access token")
    return token
