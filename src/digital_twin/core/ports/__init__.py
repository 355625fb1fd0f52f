"""Capability ports implemented by the outbound adapters."""

from .knowledge_base_port import KnowledgeBasePort
from .llm_port import AnswerGeneratorPort
from .notifier_port import NotifierPort
from .retriever_port import RetrieverPort
from .text_extractor_port import TextExtractorPort

__all__ = [
    "AnswerGeneratorPort",
    "KnowledgeBasePort",
    "NotifierPort",
    "RetrieverPort",
    "TextExtractorPort",
]
