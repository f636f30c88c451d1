"""
Create the Lead record through the Salesforce REST API.
"""
import logging
from typing import Optional

import requests

from .config import DEFAULT_API_VERSION
from .errors import SubmissionError

logger = logging.getLogger(__name__)

LEAD_PATH = "/services/data/{version}/sobjects/Lead"


def build_lead_payload(client_data) -> dict:
    """Salesforce Lead fields for an extracted submission."""
    return {
        "FirstName": client_data.personal.first_name,
        "LastName": client_data.personal.last_name,
        "Street": client_data.address.street_address,
        "City": client_data.address.city,
        "PostalCode": client_data.address.zipcode,
        "CountryCode": "US",
        "StateCode": client_data.address.state_code,
        "Phone": client_data.contact.phone,
        "Email": client_data.contact.email,
        "Primary_Language__c": client_data.contact.primary_language,
        "Household_Size__c": client_data.household.size,
        "Estimated_Monthly_Household_Income__c": client_data.household.monthly_income,
        "Company": "Self",
        "Status": "Open - Not Contacted",
    }


def resolve_instance_url(token, fallback: Optional[str] = None) -> str:
    """
    Pick the org URL to send the lead to.

    Salesforce normally returns ``instance_url`` with the token. The fallback
    is only used when it doesn't, and must be configured explicitly.
    """
    if token.instance_url:
        return token.instance_url.rstrip("/")
    if fallback:
        logger.warning("Token response had no instance_url, using fallback %s", fallback)
        return fallback.rstrip("/")
    logger.error("Token response had no instance_url and no fallback is configured")
    raise SubmissionError("No Salesforce instance URL available for lead insert")


def submit_lead(
    client_data,
    token,
    fallback_instance_url: Optional[str] = None,
    api_version: str = DEFAULT_API_VERSION,
    http=None,
    timeout: Optional[float] = None,
) -> dict:
    """
    POST the lead to ``sobjects/Lead``.

    Args:
        client_data: ClientData from the field extractor
        token: AccessToken from the token exchange
        fallback_instance_url: Org URL used when the token has none
        api_version: REST API version segment, e.g. ``v61.0``
        http: Object exposing ``post`` like the ``requests`` module (defaults to it)
        timeout: Request timeout in seconds

    Returns:
        dict: Salesforce create response (``id``, ``success``, ``errors``)
    """
    http = http or requests
    instance_url = resolve_instance_url(token, fallback_instance_url)
    url = instance_url + LEAD_PATH.format(version=api_version)
    logger.info("Inserting lead, state: %s", client_data.address.state_code)

    try:
        response = http.post(
            url,
            json=build_lead_payload(client_data),
            headers={
                "Authorization": f"Bearer {token.access_token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.error("Error inserting lead: %s", e)
        raise SubmissionError(f"Lead insert to {url} failed: {e}") from e

    if not 200 <= response.status_code < 300:
        body = (response.text or "")[:500]
        logger.error("Salesforce lead insert returned %s: %s", response.status_code, body)
        raise SubmissionError(
            f"Lead insert failed with status {response.status_code}",
            status_code=response.status_code,
            body=body,
        )

    try:
        result = response.json()
    except ValueError:
        result = {}
    logger.info("Lead created: %s", result.get("id") if isinstance(result, dict) else result)
    return result
