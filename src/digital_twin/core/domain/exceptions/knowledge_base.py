"""Knowledge base and ingestion exceptions."""

from .base import DigitalTwinError


class KnowledgeBaseError(DigitalTwinError):
    """The knowledge base file could not be read or written."""

    error_code = "DT_KB_001"


class IngestionError(KnowledgeBaseError):
    """An ingestion run could not produce documents."""

    error_code = "DT_KB_002"


class PDFExtractionError(IngestionError):
    """No text could be extracted from the PDF.

    Common causes:
    - Image-only (scanned) PDF
    - Encrypted or corrupt file
    """

    error_code = "DT_KB_003"
