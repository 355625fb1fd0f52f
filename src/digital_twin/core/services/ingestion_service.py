"""Use-case service for adding a PDF (CV / resume) to the knowledge base."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from ..domain import Document
from ..domain.exceptions import PDFExtractionError
from ..domain.utils import chunk_text, normalize_text
from ..index import DocumentIndexCache
from ..ports import KnowledgeBasePort, TextExtractorPort

logger = logging.getLogger(__name__)


@dataclass
class IngestionReport:
    """Summary of one ingestion run."""

    source: str
    documents_added: int
    documents_removed: int
    total_documents: int
    preview: list[Document] = field(default_factory=list)


class IngestionService:
    """Extract, chunk and store a document, replacing the previous ingestion."""

    def __init__(
        self,
        extractor: TextExtractorPort,
        repository: KnowledgeBasePort,
        index_cache: DocumentIndexCache | None = None,
        reserved_prefix: str = "cv_",
        category: str = "cv_content",
        chunk_size: int = 600,
    ) -> None:
        self.extractor = extractor
        self.repository = repository
        self.index_cache = index_cache
        self.reserved_prefix = reserved_prefix
        self.category = category
        self.chunk_size = chunk_size

    def build_documents(self, text: str, timestamp: int | None = None) -> list[Document]:
        """Chunk ``text`` into documents with replaceable, reserved-prefix ids."""
        timestamp = timestamp if timestamp is not None else int(time.time() * 1000)
        return [
            Document(
                id=f"{self.reserved_prefix}chunk_{timestamp}_{i}",
                category=self.category,
                content=chunk,
            )
            for i, chunk in enumerate(chunk_text(text, chunk_size=self.chunk_size))
        ]

    def ingest_pdf(self, path: Path) -> IngestionReport:
        """Ingest ``path`` into the knowledge base.

        Raises:
            PDFExtractionError: If the file yields no text.
        """
        text = normalize_text(self.extractor.extract_text(path))
        if not text:
            raise PDFExtractionError(
                "Could not extract text from PDF; it might be image-based or empty",
                context={"path": str(path)},
            )

        new_documents = self.build_documents(text)
        previous_count = len(self.repository.load())
        merged = self.repository.replace_reserved(new_documents, self.reserved_prefix)
        removed = previous_count + len(new_documents) - len(merged)

        if self.index_cache is not None:
            self.index_cache.reset()

        logger.info(
            "Ingested %s: %d chunks added, %d replaced, %d total",
            path.name,
            len(new_documents),
            removed,
            len(merged),
            extra={"path": str(path), "document_count": len(merged)},
        )
        return IngestionReport(
            source=str(path),
            documents_added=len(new_documents),
            documents_removed=removed,
            total_documents=len(merged),
            preview=new_documents[:3],
        )
