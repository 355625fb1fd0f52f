"""Text Extractor Port Interface."""

from pathlib import Path
from typing import Protocol


class TextExtractorPort(Protocol):
    """Port for pulling plain text out of an uploaded file."""

    def extract_text(self, path: Path) -> str:
        """Return the text content of ``path``."""
        ...
