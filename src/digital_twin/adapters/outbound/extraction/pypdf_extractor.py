"""PDF text extraction with pypdf."""

import logging
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ....core.domain.exceptions import PDFExtractionError
from ....core.domain.utils import normalize_text

logger = logging.getLogger(__name__)


class PypdfTextExtractor:
    """Extract page text from a PDF file."""

    def extract_text(self, path: Path) -> str:
        """Return the normalized text of every page, separated by blank lines.

        Raises:
            PDFExtractionError: If the file is missing or cannot be parsed.
        """
        if not path.exists():
            raise PDFExtractionError("PDF file not found", context={"path": str(path)})

        try:
            reader = PdfReader(path)
            text_parts = []
            for page in reader.pages:
                text = page.extract_text()
                if text:
                    normalized = normalize_text(text)
                    if normalized:
                        text_parts.append(normalized)
        except (PdfReadError, OSError) as e:
            raise PDFExtractionError(
                "Failed to parse PDF file", cause=e, context={"path": str(path)}
            ) from e

        logger.info("Extracted %d pages of text from %s", len(text_parts), path.name)
        return "\n\n".join(text_parts)
