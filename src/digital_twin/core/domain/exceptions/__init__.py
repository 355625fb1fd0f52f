"""Exception hierarchy for the digital twin agent.

All exceptions are re-exported here:

    from digital_twin.core.domain.exceptions import DigitalTwinError, LLMRateLimitError
"""

from .base import DigitalTwinError, RaiseSite
from .configuration import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingAPIKeyError,
)
from .knowledge_base import IngestionError, KnowledgeBaseError, PDFExtractionError
from .llm import (
    LLMConnectionError,
    LLMError,
    LLMGenerationError,
    LLMRateLimitError,
)
from .retrieval import RetrievalError
from .validation import EmptyQueryError, ValidationError

__all__ = [
    # Base
    "RaiseSite",
    "DigitalTwinError",
    # Configuration
    "ConfigurationError",
    "MissingAPIKeyError",
    "InvalidConfigurationError",
    # Knowledge base
    "KnowledgeBaseError",
    "IngestionError",
    "PDFExtractionError",
    # LLM
    "LLMError",
    "LLMConnectionError",
    "LLMRateLimitError",
    "LLMGenerationError",
    # Retrieval
    "RetrievalError",
    # Validation
    "ValidationError",
    "EmptyQueryError",
]
