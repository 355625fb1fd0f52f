"""Answer generation backend exceptions."""

from .base import DigitalTwinError


class LLMError(DigitalTwinError):
    """Base error for language-model calls."""

    error_code = "DT_LLM_001"


class LLMConnectionError(LLMError):
    """The chat-completion endpoint could not be reached.

    Common causes:
    - Network issues or timeout
    - Service unavailable
    """

    error_code = "DT_LLM_002"


class LLMRateLimitError(LLMError):
    """The provider rejected the request with HTTP 429."""

    error_code = "DT_LLM_003"


class LLMGenerationError(LLMError):
    """The provider answered with an error status or a malformed body."""

    error_code = "DT_LLM_004"
