"""Pure query topic classification logic."""

from __future__ import annotations

import re
from collections.abc import Iterable

from ..domain import QueryTopic

# Anchored: only the start of the message counts
GREETING_PATTERN = r"^(hi|hello|hey|good\s*(morning|afternoon|evening)|what'?s?\s*up|howdy)"
ABOUT_ME_PATTERN = r"^(who\s*are\s*you|tell\s*me\s*about\s*(yourself|you)|introduce\s*yourself)"

TOPIC_PATTERNS: dict[QueryTopic, list[str]] = {
    QueryTopic.EDUCATION: [
        r"master|degree|university|education|thesis|stud(y|ies)|bachelor|diploma|school",
    ],
    QueryTopic.EXPERIENCE: [
        r"experience|\bwork|\bjob|intern|career|employ",
    ],
    QueryTopic.SKILLS: [
        r"skill|python|pytorch|langchain|react|typescript",
        r"machine learning|deep learning|\bai\b|data science",
    ],
    QueryTopic.PROJECTS: [
        r"project|split learning|\brag\b|agent|classification|mlops",
    ],
}


class QueryClassifier:
    """Classify visitor questions into portfolio topics."""

    def __init__(self, extra_keywords: Iterable[str] = ()) -> None:
        """Initialize the classifier.

        Args:
            extra_keywords: Owner-specific terms (employers, places, ...) that
                mark a question as being about the owner's experience.
        """
        keywords = [re.escape(k.lower()) for k in extra_keywords if k.strip()]
        self._extra_pattern = re.compile("|".join(keywords)) if keywords else None

    def classify(self, query: str) -> QueryTopic:
        stripped = query.strip().lower()

        if re.search(GREETING_PATTERN, stripped):
            return QueryTopic.GREETING
        if re.search(ABOUT_ME_PATTERN, stripped):
            return QueryTopic.ABOUT_ME

        for topic, patterns in TOPIC_PATTERNS.items():
            for pattern in patterns:
                if re.search(pattern, stripped):
                    return topic

        if self._extra_pattern and self._extra_pattern.search(stripped):
            return QueryTopic.EXPERIENCE

        return QueryTopic.OUT_OF_SCOPE

    def is_in_scope(self, query: str) -> bool:
        return self.classify(query) != QueryTopic.OUT_OF_SCOPE
