"""Unit tests for system prompt construction."""

import pytest

from digital_twin.core.domain import ChatMessage, ContextDocument
from digital_twin.core.services import PromptBuilder

# Apply @pytest.mark.unit to all tests in this module
pytestmark = pytest.mark.unit


@pytest.fixture
def builder():
    return PromptBuilder(owner_name="Ada Example", twin_name="Echo")


class TestPersona:
    def test_names_are_filled_in(self, builder):
        assert 'You are "Echo", the AI digital twin of Ada Example.' in builder.persona

    def test_custom_persona_template(self):
        builder = PromptBuilder(
            owner_name="Ada", twin_name="Echo", persona_prompt="I am {twin_name}, twin of {owner_name}."
        )
        assert builder.persona == "I am Echo, twin of Ada."


class TestContext:
    """Tests for the retrieved-context block."""

    def test_relevant_documents_filters_by_threshold(self, builder):
        docs = [
            ContextDocument(id="low", content="x", score=0.01),
            ContextDocument(id="high", content="y", score=0.3),
            ContextDocument(id="unscored", content="z"),
        ]
        assert [doc.id for doc in builder.relevant_documents(docs)] == ["high", "unscored"]

    def test_score_at_threshold_is_excluded(self, builder):
        docs = [
            ContextDocument(id="at", content="x", score=0.05),
            ContextDocument(id="above", content="y", score=0.0501),
        ]
        assert [doc.id for doc in builder.relevant_documents(docs)] == ["above"]
        assert "• (5% match) y" in builder.format_context(docs)
        assert "x" not in builder.format_context(docs)

    def test_groups_by_category(self, builder, context_documents):
        context = builder.format_context(context_documents)

        assert "[SKILLS]\n• (42% match) Python developer skilled in machine learning" in context
        assert "[EDUCATION]\n• (20% match) Bachelor degree in computer science" in context
        assert context.index("[SKILLS]") < context.index("[EDUCATION]")

    def test_falls_back_to_source_then_general(self, builder):
        docs = [
            ContextDocument(id="1", content="From source", source="projects"),
            ContextDocument(id="2", content="No category"),
        ]
        context = builder.format_context(docs)

        assert "[PROJECTS]\n• From source" in context
        assert "[GENERAL]\n• No category" in context

    def test_nothing_relevant_gives_empty_string(self, builder):
        docs = [ContextDocument(id="1", content="weak", score=0.001)]
        assert builder.format_context(docs) == ""


class TestHistory:
    """Tests for the conversation memory block."""

    def test_short_history_is_ignored(self, builder):
        assert builder.format_history([]) == ""
        assert builder.format_history([ChatMessage(role="user", content="Hi")]) == ""

    def test_single_prior_exchange_is_remembered(self, builder):
        history = [
            ChatMessage(role="user", content="Hi"),
            ChatMessage(role="assistant", content="Hello!"),
        ]
        assert builder.format_history(history) == "User: Hi\nYou: Hello!"

    def test_formats_speakers_and_skips_system(self, builder):
        history = [
            ChatMessage(role="system", content="ignored"),
            ChatMessage(role="user", content="What do you study?"),
            ChatMessage(role="assistant", content="Computer science."),
        ]

        assert builder.format_history(history) == (
            "User: What do you study?\nYou: Computer science."
        )

    def test_window_counts_the_current_question(self):
        builder = PromptBuilder(history_window=3)
        history = [ChatMessage(role="user", content=f"message {i}") for i in range(6)]

        memory = builder.format_history(history)

        assert "message 3" not in memory
        assert memory.splitlines() == ["User: message 4", "User: message 5"]

    def test_default_window_keeps_seven_prior_messages(self, builder):
        history = [ChatMessage(role="user", content=f"message {i}") for i in range(10)]

        lines = builder.format_history(history).splitlines()

        assert lines[0] == "User: message 3"
        assert len(lines) == 7

    def test_window_of_one_leaves_no_room_for_history(self):
        builder = PromptBuilder(history_window=1)
        history = [ChatMessage(role="user", content=f"message {i}") for i in range(4)]

        assert builder.format_history(history) == ""

    def test_truncates_long_messages(self):
        builder = PromptBuilder(history_snippet_length=10)
        history = [ChatMessage(role="user", content="abcdefghijklmnop")] * 3

        assert builder.format_history(history).splitlines()[0] == "User: abcdefghij..."


class TestSystemPrompt:
    def test_includes_context_and_memory(self, builder, context_documents):
        history = [ChatMessage(role="user", content=f"q{i}") for i in range(3)]

        prompt = builder.build_system_prompt(context_documents, history)

        assert prompt.startswith(builder.persona)
        assert "## Recent Conversation" in prompt
        assert "## Knowledge Context" in prompt
        assert prompt.index("## Recent Conversation") < prompt.index("## Knowledge Context")

    def test_first_follow_up_includes_memory(self, builder):
        history = [
            ChatMessage(role="user", content="Where did you study?"),
            ChatMessage(role="assistant", content="In Milan."),
        ]

        prompt = builder.build_system_prompt([], history)

        assert "## Recent Conversation" in prompt
        assert "You: In Milan." in prompt

    def test_persona_only_without_context_or_history(self, builder):
        assert builder.build_system_prompt([]) == builder.persona
