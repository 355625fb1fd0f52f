"""
Pytest configuration and shared fixtures.
"""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from digital_twin.core.domain import ContextDocument, Document


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (HTTP app, no network)")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test data."""
    dir_path = Path(tempfile.mkdtemp(prefix="digital_twin_test_"))
    yield dir_path
    if dir_path.exists():
        shutil.rmtree(dir_path)


@pytest.fixture
def sample_documents():
    """Small portfolio knowledge base."""
    return [
        Document(id="1", category="skills", content="Python developer skilled in machine learning"),
        Document(id="2", category="skills", content="Experienced with PyTorch and deep learning"),
        Document(
            id="3",
            category="education",
            content="Bachelor degree in computer science from the university",
        ),
        Document(id="4", category="projects", content="Built a retrieval chatbot for my portfolio"),
    ]


@pytest.fixture
def knowledge_base_file(temp_dir, sample_documents):
    """Knowledge base JSON file in the flat array layout."""
    path = temp_dir / "knowledge-base.json"
    path.write_text(
        json.dumps([doc.to_dict() for doc in sample_documents]),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def context_documents():
    """Retrieved snippets as handed to an answer generator."""
    return [
        ContextDocument(
            id="1",
            content="Python developer skilled in machine learning",
            source="skills",
            score=0.42,
            metadata={"category": "skills"},
        ),
        ContextDocument(
            id="3",
            content="Bachelor degree in computer science",
            source="education",
            score=0.2,
            metadata={"category": "education"},
        ),
    ]
