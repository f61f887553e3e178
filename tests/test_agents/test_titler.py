"""Tests for quiz title suggestions."""

from unittest.mock import MagicMock

from langchain_core.messages import AIMessage

from src.agents.titler import fallback_title, generate_title


def make_llm(content: str | None = None, error: Exception | None = None) -> MagicMock:
    llm = MagicMock()
    if error is not None:
        llm.invoke.side_effect = error
    else:
        llm.invoke.return_value = AIMessage(content=content)
    return llm


class TestGenerateTitle:
    """Test title generation."""

    def test_strips_quotes(self):
        """Test surrounding quotes are removed."""
        llm = make_llm('"Red Planet Rumble"')
        assert generate_title("Mars", llm=llm) == "Red Planet Rumble"

    def test_truncates_to_fifty_characters(self):
        """Test long titles are cut."""
        llm = make_llm("A" * 80)
        assert generate_title("Mars", llm=llm) == "A" * 50

    def test_includes_at_most_three_samples(self):
        """Test sample questions give the model context."""
        llm = make_llm("Title")

        generate_title("Mars", ["Q1?", "Q2?", "Q3?", "Q4?"], llm=llm)

        prompt = llm.invoke.call_args.args[0][0].content
        assert "Q1?; Q2?; Q3?" in prompt
        assert "Q4?" not in prompt

    def test_error_falls_back(self):
        """Test provider errors never escape."""
        llm = make_llm(error=RuntimeError("offline"))
        assert generate_title("Mars", llm=llm) == "Quiz: Mars"

    def test_empty_reply_falls_back(self):
        """Test blank replies use the fallback title."""
        llm = make_llm("   ")
        assert generate_title("Mars", llm=llm) == "Quiz: Mars"

    def test_fallback_is_truncated(self):
        """Test long topics still give a 50 character title."""
        assert len(fallback_title("x" * 100)) == 50
