"""Lexical retrieval engine: tokenizer, TF-IDF vectors and the document index."""

from .document_index import DEFAULT_RELEVANCE_THRESHOLD, DocumentIndex, DocumentIndexCache
from .tfidf import build_vocabulary, compute_idf, compute_tf, compute_tfidf, cosine_similarity
from .tokenizer import tokenize

__all__ = [
    "DEFAULT_RELEVANCE_THRESHOLD",
    "DocumentIndex",
    "DocumentIndexCache",
    "build_vocabulary",
    "compute_idf",
    "compute_tf",
    "compute_tfidf",
    "cosine_similarity",
    "tokenize",
]
