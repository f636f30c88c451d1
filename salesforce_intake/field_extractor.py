"""
Map a form-builder submission onto the fields we send to Salesforce.

Answers are addressed by their question label, so lookups are exact,
case-sensitive string matches on ``name``.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from .errors import InvalidEventError, MissingFieldError, UnknownStateError

logger = logging.getLogger(__name__)

FIRST_NAME = "First Name"
LAST_NAME = "Last Name"
EMAIL = "Email"
PHONE = "Phone"
ADDRESS = "Your address"
PRIMARY_LANGUAGE = "Primary Language"
HOUSEHOLD_SIZE = "Number of family members in your household"
MONTHLY_INCOME = "Estimated Monthly Household Income"

REQUIRED_QUESTIONS = (
    FIRST_NAME,
    LAST_NAME,
    EMAIL,
    PHONE,
    ADDRESS,
    PRIMARY_LANGUAGE,
    HOUSEHOLD_SIZE,
    MONTHLY_INCOME,
)

STATE_CODES = {
    "Alabama": "AL",
    "Alaska": "AK",
    "American Samoa": "AS",
    "Arizona": "AZ",
    "Arkansas": "AR",
    "California": "CA",
    "Colorado": "CO",
    "Connecticut": "CT",
    "Delaware": "DE",
    "District of Columbia": "DC",
    "Florida": "FL",
    "Georgia": "GA",
    "Guam": "GU",
    "Hawaii": "HI",
    "Idaho": "ID",
    "Illinois": "IL",
    "Indiana": "IN",
    "Iowa": "IA",
    "Kansas": "KS",
    "Kentucky": "KY",
    "Louisiana": "LA",
    "Maine": "ME",
    "Maryland": "MD",
    "Massachusetts": "MA",
    "Michigan": "MI",
    "Minnesota": "MN",
    "Mississippi": "MS",
    "Missouri": "MO",
    "Montana": "MT",
    "Nebraska": "NE",
    "Nevada": "NV",
    "New Hampshire": "NH",
    "New Jersey": "NJ",
    "New Mexico": "NM",
    "New York": "NY",
    "North Carolina": "NC",
    "North Dakota": "ND",
    "Northern Mariana Islands": "MP",
    "Ohio": "OH",
    "Oklahoma": "OK",
    "Oregon": "OR",
    "Pennsylvania": "PA",
    "Puerto Rico": "PR",
    "Rhode Island": "RI",
    "South Carolina": "SC",
    "South Dakota": "SD",
    "Tennessee": "TN",
    "Texas": "TX",
    "Utah": "UT",
    "Vermont": "VT",
    "Virgin Islands": "VI",
    "Virginia": "VA",
    "Washington": "WA",
    "West Virginia": "WV",
    "Wisconsin": "WI",
    "Wyoming": "WY",
}


@dataclass
class PersonalInfo:
    first_name: Any
    last_name: Any


@dataclass
class ContactInfo:
    email: Any
    phone: Any
    primary_language: Any


@dataclass
class Address:
    street_address: Any
    city: Any
    state: Any
    state_code: str
    zipcode: Any


@dataclass
class Household:
    size: Any
    monthly_income: Any


@dataclass
class ClientData:
    personal: PersonalInfo
    contact: ContactInfo
    address: Address
    household: Household


def parse_questions(event: Mapping) -> list:
    """
    Pull the question/answer list out of an API Gateway event.

    Args:
        event: Lambda event; ``body`` may be a JSON string, a dict, or absent

    Returns:
        list: ``submission.questions`` from the payload
    """
    if "body" in event:
        body = event["body"]
        if isinstance(body, (str, bytes)):
            try:
                body = json.loads(body or "{}")
            except ValueError as e:
                logger.error("Event body is not valid JSON")
                raise InvalidEventError("invalid JSON body") from e
    else:
        body = event

    submission = body.get("submission") if isinstance(body, dict) else None
    questions = submission.get("questions") if isinstance(submission, dict) else None
    if not isinstance(questions, list):
        logger.error("Event body has no submission.questions list")
        raise InvalidEventError("missing submission.questions")
    for index, question in enumerate(questions):
        if not isinstance(question, dict):
            logger.error("Question %d is not an object: %r", index, question)
            raise InvalidEventError(f"submission.questions[{index}] must be an object")
    return questions


def get_answer_for_question(questions: Sequence[Mapping], question_name: str):
    """Return the value of the first question whose name matches exactly."""
    for question in questions:
        if question.get("name") == question_name:
            return question.get("value")
    logger.error("Question with name %s not found", question_name)
    raise MissingFieldError(question_name)


def get_state_code(state: str) -> str:
    """Two-letter postal code for a full state or territory name."""
    try:
        return STATE_CODES[state]
    except (KeyError, TypeError):
        logger.error("No state code for state: %s", state)
        raise UnknownStateError(state) from None


def extract_client_data(questions: Sequence[Mapping]) -> ClientData:
    answers = {name: get_answer_for_question(questions, name) for name in REQUIRED_QUESTIONS}

    address = answers[ADDRESS]
    if not isinstance(address, dict):
        logger.error("Answer to %r is not an address object", ADDRESS)
        raise InvalidEventError(f"{ADDRESS} answer must be an object")

    state = address.get("state")
    state_code = get_state_code(state)

    return ClientData(
        personal=PersonalInfo(
            first_name=answers[FIRST_NAME],
            last_name=answers[LAST_NAME],
        ),
        contact=ContactInfo(
            email=answers[EMAIL],
            phone=answers[PHONE],
            primary_language=answers[PRIMARY_LANGUAGE],
        ),
        address=Address(
            street_address=address.get("address"),
            city=address.get("city"),
            state=state,
            state_code=state_code,
            zipcode=address.get("zipcode"),
        ),
        household=Household(
            size=answers[HOUSEHOLD_SIZE],
            monthly_income=answers[MONTHLY_INCOME],
        ),
    )
