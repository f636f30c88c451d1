"""Exceptions raised while loading a form submission into Salesforce."""


class LeadIntakeError(Exception):
    """Base class for every failure in the intake pipeline."""


class InvalidEventError(LeadIntakeError):
    """The inbound webhook event is not a form submission we can read."""


class RetrievalError(LeadIntakeError):
    """A secret is missing, empty or unreadable."""

    def __init__(self, message, secret_id=None):
        super().__init__(message)
        self.secret_id = secret_id


class MissingFieldError(LeadIntakeError):
    """A required question is absent from the submission."""

    def __init__(self, question_name):
        super().__init__(f"Question with name {question_name} not found")
        self.question_name = question_name


class UnknownStateError(LeadIntakeError):
    """A state name has no entry in the state code table."""

    def __init__(self, state):
        super().__init__(f"No state code for state: {state}")
        self.state = state


class _HTTPFailure(LeadIntakeError):
    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AuthError(_HTTPFailure):
    """The JWT assertion could not be built or exchanged for a token."""


class SubmissionError(_HTTPFailure):
    """Salesforce did not accept the lead."""
