"""Form-builder webhook to Salesforce Lead intake."""

__version__ = "0.1.0"
