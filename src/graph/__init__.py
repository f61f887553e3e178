"""LangGraph workflow and state management."""

# Note: Avoid importing workflow here so the state module can be used on its own
# Import directly from modules as needed:
# from src.graph.state import GenerationState, create_initial_state
# from src.graph.workflow import generate_quiz, run_generation

__all__ = [
    "GenerationState",
    "create_initial_state",
    "generate_quiz",
    "run_generation",
]
