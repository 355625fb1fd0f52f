"""TF-IDF vectorization and cosine similarity over a fixed vocabulary.

Vectors are dense ``numpy`` arrays whose length is the vocabulary size.
All weights are non-negative, so cosine similarity lies in [0, 1].
"""

from collections import Counter
from collections.abc import Iterable

import numpy as np

from ..domain import Document
from .tokenizer import tokenize

Vocabulary = dict[str, int]


def build_vocabulary(documents: Iterable[Document]) -> Vocabulary:
    """Assign each distinct term a position in first-seen order."""
    vocabulary: Vocabulary = {}
    for doc in documents:
        for token in tokenize(doc.content):
            if token not in vocabulary:
                vocabulary[token] = len(vocabulary)
    return vocabulary


def compute_tf(text: str, vocabulary: Vocabulary) -> np.ndarray:
    """Term counts of ``text`` divided by its total token count.

    Out-of-vocabulary tokens count toward the total but have no slot.
    A text without tokens yields the zero vector.
    """
    vector = np.zeros(len(vocabulary), dtype=np.float64)
    tokens = tokenize(text)
    if not tokens:
        return vector

    total = len(tokens)
    for token, count in Counter(tokens).items():
        idx = vocabulary.get(token)
        if idx is not None:
            vector[idx] = count / total
    return vector


def compute_idf(documents: Iterable[Document], vocabulary: Vocabulary) -> np.ndarray:
    """``ln(N / df) + 1`` for every vocabulary term."""
    doc_frequency: Counter[str] = Counter()
    doc_count = 0
    for doc in documents:
        doc_count += 1
        doc_frequency.update(set(tokenize(doc.content)))

    idf = np.zeros(len(vocabulary), dtype=np.float64)
    for token, idx in vocabulary.items():
        df = doc_frequency.get(token) or 1
        idf[idx] = np.log(doc_count / df) + 1.0
    return idf


def compute_tfidf(text: str, vocabulary: Vocabulary, idf: np.ndarray) -> np.ndarray:
    """Element-wise product of the TF vector and the IDF table."""
    return compute_tf(text, vocabulary) * idf


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine of the angle between ``a`` and ``b``; 0.0 if either is a zero vector."""
    denominator = float(np.linalg.norm(a)) * float(np.linalg.norm(b))
    if denominator == 0.0:
        return 0.0
    score = float(np.dot(a, b)) / denominator
    # Rounding can push parallel vectors a hair above 1.0
    return min(max(score, 0.0), 1.0)
