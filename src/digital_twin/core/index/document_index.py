"""In-memory TF-IDF document index with cosine similarity search.

The index is built once from an immutable corpus snapshot: vocabulary,
IDF table and one weighted vector per document are computed up front.
There is no incremental update; a changed corpus means a new index.
"""

import logging
import threading
from collections.abc import Sequence

from ..domain import Document, ScoredDocument, SearchResult
from .tfidf import build_vocabulary, compute_idf, compute_tfidf, cosine_similarity

logger = logging.getLogger(__name__)

# Minimum best score for a search to count as having relevant content.
# Tuned for small personal knowledge bases; recalibrate for other corpora.
DEFAULT_RELEVANCE_THRESHOLD = 0.05


class DocumentIndex:
    """TF-IDF vector store over a fixed set of documents."""

    def __init__(
        self,
        documents: Sequence[Document],
        relevance_threshold: float = DEFAULT_RELEVANCE_THRESHOLD,
    ) -> None:
        """Build the index.

        Args:
            documents: Corpus to index, in insertion order.
            relevance_threshold: Minimum best score for ``has_relevant_content``.
        """
        self._documents: tuple[Document, ...] = tuple(documents)
        self.relevance_threshold = relevance_threshold
        self._vocabulary = build_vocabulary(self._documents)
        self._idf = compute_idf(self._documents, self._vocabulary)
        # Vectors are stored by position so duplicate ids cannot collide
        self._vectors = [
            compute_tfidf(doc.content, self._vocabulary, self._idf) for doc in self._documents
        ]
        logger.debug(
            "Built TF-IDF index: %d documents, %d terms",
            len(self._documents),
            len(self._vocabulary),
        )

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def vocabulary_size(self) -> int:
        return len(self._vocabulary)

    def search(self, query: str, top_k: int = 5) -> SearchResult:
        """Rank documents by cosine similarity to ``query``.

        Args:
            query: Free-text query. Terms unknown to the corpus are ignored.
            top_k: Maximum number of documents to return.

        Returns:
            SearchResult sorted by descending score. Ties keep corpus order.
        """
        query_vector = compute_tfidf(query, self._vocabulary, self._idf)

        scored = [
            ScoredDocument(document=doc, score=cosine_similarity(query_vector, vector))
            for doc, vector in zip(self._documents, self._vectors)
        ]
        # sorted() is stable, so equal scores stay in insertion order
        ranked = sorted(scored, key=lambda result: result.score, reverse=True)[: max(top_k, 0)]

        max_score = ranked[0].score if ranked else 0.0
        return SearchResult(
            documents=ranked,
            has_relevant_content=max_score >= self.relevance_threshold,
            max_score=max_score,
        )

    def get_all_documents(self) -> list[Document]:
        """Return the indexed corpus in insertion order."""
        return list(self._documents)


class DocumentIndexCache:
    """Holds the current DocumentIndex and rebuilds it when the corpus changes.

    A corpus is considered changed when its document count differs from the
    one the cached index was built with. ``reset`` forces the next ``get``
    to rebuild regardless. Rebuilds happen outside any reader's view: the new
    index is built completely and then swapped in.
    """

    def __init__(self, relevance_threshold: float = DEFAULT_RELEVANCE_THRESHOLD) -> None:
        self.relevance_threshold = relevance_threshold
        self._index: DocumentIndex | None = None
        self._document_count = 0
        self._lock = threading.Lock()

    def get(self, documents: Sequence[Document]) -> DocumentIndex:
        """Return an index for ``documents``, reusing the cached one if still valid."""
        with self._lock:
            if self._index is None or len(documents) != self._document_count:
                logger.info("Building document index for %d documents", len(documents))
                index = DocumentIndex(documents, relevance_threshold=self.relevance_threshold)
                self._index = index
                self._document_count = len(documents)
            return self._index

    def reset(self) -> None:
        """Drop the cached index so the next ``get`` rebuilds it."""
        with self._lock:
            self._index = None
            self._document_count = 0
