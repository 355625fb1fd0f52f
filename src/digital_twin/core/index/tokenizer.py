"""Tokenizer shared by vocabulary building, document vectors and query vectors."""

import re

_NON_WORD = re.compile(r"[^\w\s]")

# Tokens this short or shorter are dropped ("a", "of", "to", ...).
MIN_TOKEN_LENGTH = 3


def tokenize(text: str) -> list[str]:
    """Lowercase ``text``, blank out punctuation and split into index terms."""
    if not text:
        return []
    cleaned = _NON_WORD.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH]
