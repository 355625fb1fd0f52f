"""Text helpers for ingestion, prompt building and notifications.

PDF extraction and pasted chat input both bring in byte-order marks and
U+FFFD replacement characters, and PDFs add ligature code points. Text
goes through ``normalize_text`` once, where it enters the system, before
it is chunked, indexed or shown to the model.
"""

import unicodedata

_STRAY_CHARACTERS = str.maketrans("", "", "\ufeff\ufffd")

_SENTENCE_ENDS = (". ", ".\n", "? ", "?\n", "! ", "!\n")


def normalize_text(text: str) -> str:
    """Strip BOM and replacement characters, apply NFKC, trim whitespace."""
    if not text:
        return ""
    return unicodedata.normalize("NFKC", text.translate(_STRAY_CHARACTERS)).strip()


def truncate(text: str, max_length: int, marker: str = "...") -> str:
    """Cut ``text`` to ``max_length`` characters and append ``marker`` when cut."""
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}{marker}"


def _chunk_end(text: str, start: int, chunk_size: int) -> int:
    """End of the chunk starting at ``start``.

    Prefers the last sentence end inside the window, as long as it leaves
    the chunk at least half full.
    """
    limit = start + chunk_size
    if limit >= len(text):
        return len(text)
    last_sentence_end = max(text.rfind(end, start, limit) for end in _SENTENCE_ENDS)
    if last_sentence_end > start + chunk_size // 2:
        return last_sentence_end + 1
    return limit


def chunk_text(text: str, chunk_size: int = 600) -> list[str]:
    """Split extracted document text into knowledge base sized pieces.

    Chunks do not overlap and are at most ``chunk_size`` characters after
    stripping. Whitespace-only pieces are dropped.

    Raises:
        ValueError: If ``chunk_size`` is not positive.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    text = text.strip() if text else ""
    chunks = []
    start = 0
    while start < len(text):
        end = _chunk_end(text, start, chunk_size)
        piece = text[start:end].strip()
        if piece:
            chunks.append(piece)
        start = end
    return chunks
