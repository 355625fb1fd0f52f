"""Validation exceptions."""

from .base import DigitalTwinError


class ValidationError(DigitalTwinError):
    """Input validation failed."""

    error_code = "DT_VAL_001"


class EmptyQueryError(ValidationError):
    """The request carries no user message to answer."""

    error_code = "DT_VAL_002"
