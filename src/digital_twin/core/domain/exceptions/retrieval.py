"""Retrieval exceptions."""

from .base import DigitalTwinError


class RetrievalError(DigitalTwinError):
    """Error while retrieving context documents."""

    error_code = "DT_RET_001"
