"""Composition root wiring adapters to the application services."""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.extraction import PypdfTextExtractor
from ..adapters.outbound.knowledge_base import JsonKnowledgeBaseRepository
from ..adapters.outbound.llm import (
    OpenRouterAnswerGenerator,
    ScopedAnswerGenerator,
    TemplateAnswerGenerator,
)
from ..adapters.outbound.notifications import (
    HttpWebhookNotifier,
    NoopNotifier,
    PushoverNotifier,
)
from ..adapters.outbound.retrieval import IndexRetriever, StaticRetriever
from ..config import settings
from ..core.domain.exceptions import InvalidConfigurationError, MissingAPIKeyError
from ..core.index import DocumentIndexCache
from ..core.ports import AnswerGeneratorPort, NotifierPort, RetrieverPort
from ..core.services import (
    IngestionService,
    PromptBuilder,
    QueryClassifier,
    RagOrchestrator,
)

logger = logging.getLogger(__name__)


@lru_cache
def get_repository() -> JsonKnowledgeBaseRepository:
    return JsonKnowledgeBaseRepository(settings.knowledge_base_path)


@lru_cache
def get_index_cache() -> DocumentIndexCache:
    return DocumentIndexCache(relevance_threshold=settings.relevance_threshold)


@lru_cache
def get_retriever() -> RetrieverPort:
    logger.info("Initializing %s retriever...", settings.retriever_backend)
    if settings.retriever_backend == "static":
        return StaticRetriever.from_repository(get_repository(), limit=settings.top_k_results)
    return IndexRetriever(get_repository(), get_index_cache(), top_k=settings.top_k_results)


@lru_cache
def get_prompt_builder() -> PromptBuilder:
    return PromptBuilder(
        owner_name=settings.owner_name,
        twin_name=settings.twin_name,
        persona_prompt=settings.load_persona_prompt(),
        relevance_threshold=settings.relevance_threshold,
        history_window=settings.history_window,
        history_snippet_length=settings.history_snippet_length,
    )


@lru_cache
def get_answer_generator() -> AnswerGeneratorPort:
    logger.info("Initializing %s answer generator...", settings.llm_backend)
    prompt_builder = get_prompt_builder()
    inner: AnswerGeneratorPort
    if settings.llm_backend == "template":
        inner = TemplateAnswerGenerator()
    else:
        inner = OpenRouterAnswerGenerator(
            api_key=settings.openrouter_api_key,
            prompt_builder=prompt_builder,
            model=settings.llm_model,
            endpoint=settings.openrouter_url,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout_seconds,
            site_url=settings.site_url,
            app_title=settings.app_title,
        )
    return ScopedAnswerGenerator(
        inner,
        classifier=QueryClassifier(extra_keywords=settings.scope_keywords),
        prompt_builder=prompt_builder,
    )


@lru_cache
def get_notifier() -> NotifierPort:
    backend = settings.notifier_backend
    logger.info("Initializing %s notifier...", backend)

    if backend == "webhook":
        if not settings.push_webhook_url:
            raise InvalidConfigurationError(
                "NOTIFIER_BACKEND=webhook requires PUSH_WEBHOOK_URL",
                context={"notifier_backend": backend},
            )
        return HttpWebhookNotifier(
            endpoint=settings.push_webhook_url,
            token=settings.push_webhook_token or None,
            timeout=settings.push_timeout_seconds,
        )

    if backend == "pushover":
        if not settings.pushover_token or not settings.pushover_user_key:
            raise MissingAPIKeyError(
                "NOTIFIER_BACKEND=pushover requires PUSHOVER_TOKEN and PUSHOVER_USER_KEY"
            )
        return PushoverNotifier(
            token=settings.pushover_token,
            user_key=settings.pushover_user_key,
            endpoint=settings.pushover_url,
            timeout=settings.pushover_timeout_seconds,
            max_message_length=settings.pushover_max_message_length,
        )

    return NoopNotifier()


@lru_cache
def get_orchestrator() -> RagOrchestrator:
    logger.info("Initializing RagOrchestrator...")
    return RagOrchestrator(
        retriever=get_retriever(),
        answer_generator=get_answer_generator(),
        notifier=get_notifier(),
        push_title=settings.push_title,
        max_push_body_length=settings.max_push_body_length,
    )


@lru_cache
def get_ingestion_service() -> IngestionService:
    return IngestionService(
        extractor=PypdfTextExtractor(),
        repository=get_repository(),
        index_cache=get_index_cache(),
        reserved_prefix=settings.reserved_id_prefix,
        category=settings.ingest_category,
        chunk_size=settings.ingest_chunk_size,
    )
