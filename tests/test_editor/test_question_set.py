"""Tests for question set editing."""

import pytest

from src.editor.question_set import (
    add_question,
    delete_question,
    move_question,
    regenerate_question,
    update_answer_text,
    update_question_text,
)
from src.errors import GenerationError
from src.models.quiz import DifficultyLevel


def texts(questions):
    return [q.question_text for q in questions]


class TestUpdates:
    """Test text edits."""

    def test_update_question_text(self, sample_questions):
        """Test only the target question changes."""
        updated = update_question_text(sample_questions, 1, "New text?")

        assert texts(updated)[1] == "New text?"
        assert texts(updated)[0] == "Question number 0?"
        assert updated[1].answers == sample_questions[1].answers

    def test_update_does_not_mutate_input(self, sample_questions):
        """Test the list passed in is left alone."""
        before = texts(sample_questions)
        update_question_text(sample_questions, 0, "Changed?")
        assert texts(sample_questions) == before

    def test_update_out_of_range_is_noop(self, sample_questions):
        """Test invalid indices change nothing."""
        assert texts(update_question_text(sample_questions, 9, "x")) == texts(sample_questions)
        assert texts(update_question_text(sample_questions, -1, "x")) == texts(sample_questions)

    def test_update_answer_text_keeps_correctness(self, sample_question):
        """Test the correct flag survives a text edit."""
        updated = update_answer_text([sample_question], 0, 0, "Paris, France")

        assert updated[0].answers[0].text == "Paris, France"
        assert updated[0].answers[0].is_correct is True
        assert sample_question.answers[0].text == "Paris"

    def test_update_answer_out_of_range_is_noop(self, sample_question):
        """Test invalid answer indices change nothing."""
        updated = update_answer_text([sample_question], 0, 7, "x")
        assert updated[0].answers == sample_question.answers


class TestStructuralEdits:
    """Test add, delete and move."""

    def test_delete_shifts_later_questions(self, sample_questions):
        """Test an index held across a delete points at the next question."""
        after_delete = delete_question(sample_questions, 2)
        assert texts(after_delete) == [
            "Question number 0?",
            "Question number 1?",
            "Question number 3?",
            "Question number 4?",
        ]

        edited = update_question_text(after_delete, 2, "Edited?")
        assert texts(edited)[2] == "Edited?"
        assert "Question number 3?" not in texts(edited)

    def test_delete_out_of_range_is_noop(self, sample_questions):
        """Test invalid indices change nothing."""
        assert len(delete_question(sample_questions, 5)) == 5

    def test_add_question_appends(self, sample_questions, sample_question):
        """Test manual questions go at the end."""
        updated = add_question(sample_questions, sample_question)

        assert len(updated) == 6
        assert updated[-1] == sample_question
        assert len(sample_questions) == 5

    def test_move_question(self, sample_questions):
        """Test moving a question forward."""
        updated = move_question(sample_questions, 0, 3)
        assert texts(updated) == [
            "Question number 1?",
            "Question number 2?",
            "Question number 3?",
            "Question number 0?",
            "Question number 4?",
        ]

    def test_move_out_of_range_is_noop(self, sample_questions):
        """Test invalid positions change nothing."""
        assert texts(move_question(sample_questions, 0, 5)) == texts(sample_questions)


class TestRegenerateQuestion:
    """Test replacing one question."""

    def test_replaces_in_place(self, sample_questions, fake_generator_factory):
        """Test the replacement lands at the same index."""
        fake = fake_generator_factory()

        updated = regenerate_question(
            sample_questions, 2, "Space", "gpt-4o", DifficultyLevel.COLLEGE, generate_one=fake
        )

        assert texts(updated)[2] == "Space question 1?"
        assert len(updated) == 5
        assert texts(sample_questions)[2] == "Question number 2?"

    def test_prompt_lists_other_questions(self, sample_questions, fake_generator_factory):
        """Test every other question is passed as context."""
        fake = fake_generator_factory()

        regenerate_question(
            sample_questions, 2, "Space", "gpt-4o", DifficultyLevel.COLLEGE, generate_one=fake
        )

        assert fake.calls[0]["previous_questions"] == [
            "Question number 0?",
            "Question number 1?",
            "Question number 3?",
            "Question number 4?",
        ]

    def test_failure_leaves_list_unchanged(self, sample_questions, fake_generator_factory):
        """Test errors propagate and the caller's list is intact."""
        fake = fake_generator_factory(fail_on={1})
        before = texts(sample_questions)

        with pytest.raises(GenerationError):
            regenerate_question(
                sample_questions, 0, "Space", "gpt-4o", DifficultyLevel.COLLEGE, generate_one=fake
            )

        assert texts(sample_questions) == before

    def test_out_of_range_raises(self, sample_questions, fake_generator_factory):
        """Test there is nothing to regenerate past the end."""
        with pytest.raises(IndexError):
            regenerate_question(
                sample_questions,
                5,
                "Space",
                "gpt-4o",
                DifficultyLevel.COLLEGE,
                generate_one=fake_generator_factory(),
            )
