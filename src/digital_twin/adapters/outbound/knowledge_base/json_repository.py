"""JSON file adapter implementing the knowledge base port."""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ....core.domain import Document
from ....core.domain.exceptions import KnowledgeBaseError
from ....core.ports import KnowledgeBasePort

logger = logging.getLogger(__name__)


class JsonKnowledgeBaseRepository(KnowledgeBasePort):
    """Knowledge base stored as a JSON file.

    Reads either a flat array of records or an object with a ``documents``
    array. Always writes a flat array.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @staticmethod
    def _extract_records(payload: Any) -> list[Any]:
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict) and isinstance(payload.get("documents"), list):
            return payload["documents"]
        logger.warning("Knowledge base has an unexpected shape; treating it as empty")
        return []

    def load(self) -> list[Document]:
        """Read all documents.

        Returns:
            Documents in file order; empty if the file is missing or has an
            unknown shape.

        Raises:
            KnowledgeBaseError: If the file exists but is not valid JSON.
        """
        if not self.path.exists():
            logger.info("No knowledge base at %s; starting empty", self.path)
            return []

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8-sig"))
        except (OSError, json.JSONDecodeError) as e:
            raise KnowledgeBaseError(
                "Failed to read knowledge base",
                cause=e,
                context={"path": str(self.path)},
            ) from e

        documents = []
        for record in self._extract_records(payload):
            if not isinstance(record, dict) or "id" not in record or "content" not in record:
                logger.warning("Skipping malformed knowledge base record: %r", record)
                continue
            documents.append(Document.from_dict(record))
        return documents

    def save(self, documents: Sequence[Document]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps([doc.to_dict() for doc in documents], indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            raise KnowledgeBaseError(
                "Failed to write knowledge base",
                cause=e,
                context={"path": str(self.path)},
            ) from e

    def replace_reserved(self, documents: Sequence[Document], prefix: str) -> list[Document]:
        """Drop documents whose id starts with ``prefix`` and append ``documents``."""
        kept = [doc for doc in self.load() if not doc.id.startswith(prefix)]
        merged = kept + list(documents)
        self.save(merged)
        return merged
