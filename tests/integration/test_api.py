"""Integration tests for FastAPI endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from digital_twin.adapters.outbound.knowledge_base import JsonKnowledgeBaseRepository
from digital_twin.core.domain import ChatMessage, OrchestratorResult
from digital_twin.core.domain.exceptions import KnowledgeBaseError, MissingAPIKeyError
from digital_twin.core.index import DocumentIndexCache

ROUTERS = "digital_twin.adapters.inbound.api.routers"


@pytest.fixture
def mock_orchestrator():
    """Mock the RagOrchestrator for testing."""
    mock = MagicMock()
    mock.handle_message = AsyncMock(
        return_value=OrchestratorResult(session_id="session-1", answer="I mostly use Python.")
    )
    return mock


@pytest.fixture
def repository(knowledge_base_file):
    return JsonKnowledgeBaseRepository(knowledge_base_file)


@pytest.fixture
def client(mock_orchestrator, repository):
    """Create test client with mocked dependencies."""
    index_cache = DocumentIndexCache()
    with (
        patch(f"{ROUTERS}.chat.get_orchestrator", return_value=mock_orchestrator),
        patch(f"{ROUTERS}.knowledge.get_repository", return_value=repository),
        patch(f"{ROUTERS}.knowledge.get_index_cache", return_value=index_cache),
        patch(f"{ROUTERS}.health.get_repository", return_value=repository),
    ):
        from digital_twin.adapters.inbound.api.main import app

        yield TestClient(app)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.integration
    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    @pytest.mark.integration
    def test_readiness_reports_document_count(self, client):
        response = client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["knowledge_base"] == "loaded (4 docs)"

    @pytest.mark.integration
    def test_readiness_reports_errors(self, client):
        broken = MagicMock()
        broken.load.side_effect = KnowledgeBaseError("bad json")

        with patch(f"{ROUTERS}.health.get_repository", return_value=broken):
            data = client.get("/ready").json()

        assert data["knowledge_base"] == "error: bad json"


class TestChatEndpoint:
    """Tests for POST /api/chat."""

    @pytest.mark.integration
    def test_answers_last_user_message(self, client, mock_orchestrator):
        response = client.post(
            "/api/chat",
            json={
                "messages": [
                    {"role": "user", "content": "Hi"},
                    {"role": "assistant", "content": "Hello!"},
                    {"role": "user", "content": "What do you use Python for?"},
                ],
                "session_id": "session-1",
            },
        )

        assert response.status_code == 200
        assert response.json() == {"reply": "I mostly use Python.", "session_id": "session-1"}
        mock_orchestrator.handle_message.assert_awaited_once_with(
            "What do you use Python for?",
            session_id="session-1",
            history=[
                ChatMessage(role="user", content="Hi"),
                ChatMessage(role="assistant", content="Hello!"),
            ],
        )

    @pytest.mark.integration
    def test_trailing_assistant_message_is_ignored(self, client, mock_orchestrator):
        client.post(
            "/api/chat",
            json={
                "messages": [
                    {"role": "user", "content": "Question"},
                    {"role": "assistant", "content": "Partial answer"},
                ]
            },
        )

        args, kwargs = mock_orchestrator.handle_message.call_args
        assert args == ("Question",)
        assert kwargs["session_id"] is None
        assert kwargs["history"] == []

    @pytest.mark.integration
    def test_no_user_message_returns_structured_error(self, client):
        response = client.post(
            "/api/chat", json={"messages": [{"role": "assistant", "content": "Hello!"}]}
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["type"] == "EmptyQueryError"
        assert error["code"] == "DT_VAL_002"

    @pytest.mark.integration
    def test_empty_messages_rejected(self, client):
        response = client.post("/api/chat", json={"messages": []})
        assert response.status_code == 422

    @pytest.mark.integration
    def test_unknown_role_rejected(self, client):
        response = client.post(
            "/api/chat", json={"messages": [{"role": "tool", "content": "x"}]}
        )
        assert response.status_code == 422

    @pytest.mark.integration
    def test_long_message_is_accepted(self, client, mock_orchestrator):
        question = "Tell me about your thesis. " * 300

        response = client.post(
            "/api/chat", json={"messages": [{"role": "user", "content": question}]}
        )

        assert response.status_code == 200
        args, _ = mock_orchestrator.handle_message.call_args
        assert len(args[0]) > 4000

    @pytest.mark.integration
    def test_unconfigured_backend_returns_500(self, client):
        with patch(
            f"{ROUTERS}.chat.get_orchestrator",
            side_effect=MissingAPIKeyError("OPENROUTER_API_KEY not configured"),
        ):
            response = client.post(
                "/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]}
            )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "DT_CFG_002"


class TestKnowledgeEndpoint:
    """Tests for GET /api/knowledge."""

    @pytest.mark.integration
    def test_lists_documents(self, client):
        response = client.get("/api/knowledge")

        assert response.status_code == 200
        documents = response.json()["documents"]
        assert [doc["id"] for doc in documents] == ["1", "2", "3", "4"]
        assert set(documents[0]) == {"id", "category", "content"}

    @pytest.mark.integration
    def test_search(self, client):
        response = client.get("/api/knowledge", params={"q": "pytorch deep learning", "top_k": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == "pytorch deep learning"
        result = data["search_result"]
        assert len(result["documents"]) == 2
        assert result["documents"][0]["id"] == "2"
        assert result["has_relevant_content"] is True
        assert result["max_score"] == result["documents"][0]["score"]

    @pytest.mark.integration
    def test_invalid_top_k(self, client):
        response = client.get("/api/knowledge", params={"q": "python", "top_k": 0})
        assert response.status_code == 422


class TestAPIDocumentation:
    @pytest.mark.integration
    def test_openapi_schema(self, client):
        response = client.get("/openapi.json")

        assert response.status_code == 200
        schema = response.json()
        assert schema["info"]["title"] == "Digital Twin API"
        assert "/api/chat" in schema["paths"]
        assert "/api/knowledge" in schema["paths"]
