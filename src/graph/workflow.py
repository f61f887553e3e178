"""LangGraph workflow that generates a quiz one question at a time."""

import logging
from typing import Any, Callable, Literal

from langgraph.graph import END, StateGraph

from src.agents.generator import QuestionGenerator, generate_question
from src.graph.state import GenerationState, create_initial_state
from src.models.quiz import DifficultyLevel, GenerationConfig, Question

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, GenerationState], None]


def _default_generator(authenticated: bool) -> QuestionGenerator:
    def generate_one(
        topic: str,
        previous_questions: list[str],
        model: str,
        difficulty: DifficultyLevel,
    ) -> Question:
        return generate_question(
            topic, previous_questions, model, difficulty, authenticated=authenticated
        )

    return generate_one


def make_generator_node(
    generate_one: QuestionGenerator,
) -> Callable[[GenerationState], dict[str, Any]]:
    """
    Build the node that makes one generation attempt.

    A failed attempt is logged and recorded, never raised, and still counts
    towards progress.

    Args:
        generate_one: Function producing a single question

    Returns:
        Node function for the workflow
    """

    def generate_next(state: GenerationState) -> dict[str, Any]:
        config = state["config"]
        attempt = state["attempts"] + 1
        questions = list(state["questions"])
        previous = list(state["previous_questions"])
        errors = list(state["errors"])

        try:
            question = generate_one(
                config.topic, list(previous), config.model, config.difficulty
            )
            questions.append(question)
            previous.append(question.question_text)
        except Exception as e:
            error_msg = (
                f"Failed to generate question {attempt} of "
                f"{config.number_of_questions} ({config.topic}): {e}"
            )
            logger.warning(error_msg)
            errors.append(error_msg)

        return {
            "questions": questions,
            "previous_questions": previous,
            "attempts": attempt,
            "progress_percent": attempt / config.number_of_questions * 100,
            "errors": errors,
        }

    return generate_next


def make_continue_check(
    should_cancel: Callable[[], bool] | None = None,
) -> Callable[[GenerationState], Literal["generate", "end"]]:
    """
    Build the edge deciding whether another attempt is made.

    Args:
        should_cancel: Checked between attempts; True stops the run

    Returns:
        Routing function for the conditional edge
    """

    def should_continue(state: GenerationState) -> Literal["generate", "end"]:
        if state["attempts"] >= state["config"].number_of_questions:
            return "end"
        if should_cancel is not None and should_cancel():
            return "end"
        return "generate"

    return should_continue


def _mark_cancelled(state: GenerationState) -> dict[str, Any]:
    cancelled = state["attempts"] < state["config"].number_of_questions
    return {"cancelled": cancelled}


def create_generation_workflow(
    generate_one: QuestionGenerator,
    should_cancel: Callable[[], bool] | None = None,
) -> StateGraph:
    """
    Create the LangGraph workflow for quiz generation.

    The workflow is a loop:
    1. Generator - One attempt at a new question
    2. [Conditional] Loop back until every attempt is made or the run is cancelled
    3. Finish - Record whether the run stopped early

    Calls are strictly sequential: each prompt lists every question produced
    before it.

    Args:
        generate_one: Function producing a single question
        should_cancel: Optional cancellation check

    Returns:
        Uncompiled StateGraph
    """
    workflow = StateGraph(GenerationState)

    workflow.add_node("generator", make_generator_node(generate_one))
    workflow.add_node("finish", _mark_cancelled)

    workflow.set_entry_point("generator")

    continue_check = make_continue_check(should_cancel)
    workflow.add_conditional_edges(
        "generator",
        continue_check,
        {
            "generate": "generator",  # Loop back for the next question
            "end": "finish",
        },
    )

    workflow.add_edge("finish", END)

    return workflow


def compile_workflow(
    generate_one: QuestionGenerator,
    should_cancel: Callable[[], bool] | None = None,
):
    """
    Compile the workflow and return it ready for execution.

    Args:
        generate_one: Function producing a single question
        should_cancel: Optional cancellation check

    Returns:
        Compiled workflow
    """
    return create_generation_workflow(generate_one, should_cancel).compile()


def run_generation(
    config: GenerationConfig,
    *,
    generate_one: QuestionGenerator | None = None,
    on_progress: ProgressCallback | None = None,
    should_cancel: Callable[[], bool] | None = None,
) -> GenerationState:
    """
    Run one generation session to completion.

    Progress starts at 0 and after attempt i is i / n * 100, whether that
    attempt succeeded or not.

    Args:
        config: Session configuration
        generate_one: Function producing a single question (provider call if omitted)
        on_progress: Called with the progress percentage after every attempt
        should_cancel: Checked between attempts

    Returns:
        Final state; questions may be fewer than requested
    """
    if generate_one is None:
        generate_one = _default_generator(config.authenticated)

    workflow = compile_workflow(generate_one, should_cancel)
    state = create_initial_state(config)

    # one step per attempt plus the finish node
    run_config = {"recursion_limit": config.number_of_questions + 5}

    if on_progress is not None:
        on_progress(0.0, state)

    final_state = state
    last_attempts = 0
    for values in workflow.stream(state, run_config, stream_mode="values"):
        final_state = values
        if on_progress is not None and values["attempts"] > last_attempts:
            last_attempts = values["attempts"]
            on_progress(values["progress_percent"], values)

    if final_state["errors"]:
        logger.info(
            "Generated %d of %d questions for %r",
            len(final_state["questions"]),
            config.number_of_questions,
            config.topic,
        )
    return final_state


def generate_quiz(
    topic: str,
    number_of_questions: int,
    model: str | None,
    difficulty: DifficultyLevel | str = DifficultyLevel.COLLEGE,
    *,
    authenticated: bool = True,
    generate_one: QuestionGenerator | None = None,
    on_progress: ProgressCallback | None = None,
    should_cancel: Callable[[], bool] | None = None,
) -> list[Question]:
    """
    Generate up to number_of_questions questions about a topic.

    Args:
        topic: Quiz topic
        number_of_questions: Attempts to make (clamped to 1-50)
        model: Requested model id
        difficulty: Audience level
        authenticated: Whether the caller is signed in
        generate_one: Function producing a single question (provider call if omitted)
        on_progress: Called with the progress percentage after every attempt
        should_cancel: Checked between attempts

    Returns:
        The questions that were generated successfully, in order
    """
    config = GenerationConfig.for_caller(
        topic,
        authenticated=authenticated,
        requested_model=model,
        difficulty=DifficultyLevel(difficulty),
        number_of_questions=number_of_questions,
    )
    final_state = run_generation(
        config,
        generate_one=generate_one,
        on_progress=on_progress,
        should_cancel=should_cancel,
    )
    return final_state["questions"]
