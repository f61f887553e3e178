"""Tests for LangGraph state management."""

from src.graph.state import create_initial_state
from src.models.quiz import GenerationConfig


class TestCreateInitialState:
    """Test initial state creation."""

    def test_creates_state_with_config(self, sample_config: GenerationConfig):
        """Test that initial state contains the session config."""
        state = create_initial_state(sample_config)

        assert "config" in state
        assert state["config"] == sample_config

    def test_initializes_empty_lists(self, sample_config: GenerationConfig):
        """Test that lists are initialized as empty."""
        state = create_initial_state(sample_config)

        assert state["questions"] == []
        assert state["previous_questions"] == []
        assert state["errors"] == []

    def test_progress_starts_at_zero(self, sample_config: GenerationConfig):
        """Test that no attempts have been made yet."""
        state = create_initial_state(sample_config)

        assert state["attempts"] == 0
        assert state["progress_percent"] == 0.0

    def test_not_cancelled_initially(self, sample_config: GenerationConfig):
        """Test that the cancelled flag starts False."""
        state = create_initial_state(sample_config)

        assert state["cancelled"] is False
