"""Use-case services: orchestration, prompting and ingestion."""

from .ingestion_service import IngestionReport, IngestionService
from .orchestrator import FALLBACK_ANSWER, RagOrchestrator
from .prompt_builder import PromptBuilder
from .query_classifier import QueryClassifier

__all__ = [
    "FALLBACK_ANSWER",
    "IngestionReport",
    "IngestionService",
    "PromptBuilder",
    "QueryClassifier",
    "RagOrchestrator",
]
