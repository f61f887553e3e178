"""In-memory quiz store with ownership checks.

Quizzes reference questions in their author's question bank through ordered
links. Link orders are always 0..n-1 with no gaps; every operation that adds,
removes or moves a question renumbers them. Ownership is checked before
anything is changed, so a rejected call leaves the store as it was.
"""

import logging
from datetime import datetime
from typing import Any

from src.errors import NotFoundError, PermissionDeniedError
from src.models.quiz import DEFAULT_TIME_LIMIT, Answer, Question
from src.models.records import QuizPage, QuizQuestionLink, StoredQuestion, StoredQuiz

logger = logging.getLogger(__name__)

QUIZ_FIELDS = {"name", "description", "topic", "time_limit", "difficulty"}


class InMemoryQuizStore:
    """Quiz and question bank storage kept in dictionaries."""

    def __init__(self) -> None:
        self._quizzes: dict[str, StoredQuiz] = {}
        self._questions: dict[str, StoredQuestion] = {}

    # Quizzes

    def create_quiz(
        self,
        author_id: str,
        name: str,
        questions: list[Question],
        description: str | None = None,
        topic: str | None = None,
        time_limit: int = DEFAULT_TIME_LIMIT,
        difficulty: str | None = None,
    ) -> StoredQuiz:
        """
        Save a quiz and add its questions to the author's bank.

        Args:
            author_id: Owner of the new quiz
            name: Quiz name
            questions: Questions in quiz order
            description: Optional description
            topic: Optional topic, also used as the questions' subject
            time_limit: Seconds per question
            difficulty: Difficulty level value

        Returns:
            The stored quiz
        """
        quiz = StoredQuiz(
            name=name,
            description=description,
            topic=topic,
            time_limit=time_limit,
            difficulty=difficulty,
            author_id=author_id,
        )
        for order, question in enumerate(questions):
            stored = self.save_question(author_id, question, subject=topic or "General")
            quiz.questions.append(
                QuizQuestionLink(quiz_id=quiz.id, question_id=stored.id, order=order)
            )

        self._quizzes[quiz.id] = quiz
        logger.debug("Created quiz %s with %d questions", quiz.id, len(questions))
        return quiz

    def list_quizzes(self, author_id: str, limit: int = 20, cursor: str | None = None) -> QuizPage:
        """
        List an author's quizzes, most recently updated first.

        Args:
            author_id: Owner whose quizzes are listed
            limit: Page size (1-100)
            cursor: Id of the first quiz of the page, from a previous next_cursor

        Returns:
            Page of quizzes and the cursor for the next page
        """
        if not 1 <= limit <= 100:
            raise ValueError("limit must be between 1 and 100")

        owned = [q for q in self._quizzes.values() if q.author_id == author_id]
        # insertion position breaks timestamp ties
        quizzes = [
            quiz
            for _, quiz in sorted(
                enumerate(owned), key=lambda pair: (pair[1].updated_at, pair[0]), reverse=True
            )
        ]

        start = 0
        if cursor is not None:
            ids = [q.id for q in quizzes]
            if cursor not in ids:
                raise NotFoundError(f"Unknown cursor {cursor}")
            start = ids.index(cursor)

        page = quizzes[start : start + limit + 1]
        next_cursor = None
        if len(page) > limit:
            next_cursor = page.pop().id

        return QuizPage(quizzes=page, next_cursor=next_cursor)

    def get_quiz(self, quiz_id: str, user_id: str) -> StoredQuiz:
        """Return a quiz the user owns."""
        quiz = self._quizzes.get(quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz not found")
        if quiz.author_id != user_id:
            raise PermissionDeniedError("You don't have permission to view this quiz")
        return quiz

    def get_quiz_by_short_id(self, short_id: str) -> StoredQuiz:
        """Return a quiz by its share id; anyone with the link can read it."""
        for quiz in self._quizzes.values():
            if quiz.short_id == short_id:
                return quiz
        raise NotFoundError("Quiz not found")

    def quiz_questions(self, quiz_id: str, user_id: str | None = None) -> list[Question]:
        """
        Questions of a quiz in order.

        Args:
            quiz_id: Quiz to read
            user_id: Caller; ownership is only checked when given

        Returns:
            Questions in quiz order
        """
        quiz = self._quizzes.get(quiz_id)
        if quiz is None:
            raise NotFoundError("Quiz not found")
        if user_id is not None and quiz.author_id != user_id:
            raise PermissionDeniedError("You don't have permission to view this quiz")
        return [self._questions[qid].to_question() for qid in quiz.question_ids]

    def update_quiz(self, quiz_id: str, user_id: str, **changes: Any) -> StoredQuiz:
        """Update quiz metadata (name, description, topic, time_limit, difficulty)."""
        quiz = self._owned_quiz(quiz_id, user_id, "update")

        unknown = set(changes) - QUIZ_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        updated = quiz.model_copy(update={**changes, "updated_at": datetime.now()})
        # re-run field validation on the merged values
        updated = StoredQuiz.model_validate(updated.model_dump())
        self._quizzes[quiz_id] = updated
        return updated

    def delete_quiz(self, quiz_id: str, user_id: str) -> StoredQuiz:
        """Delete a quiz. Its questions stay in the bank."""
        quiz = self._owned_quiz(quiz_id, user_id, "delete")
        del self._quizzes[quiz_id]
        return quiz

    def add_question(
        self, quiz_id: str, user_id: str, question_id: str, order: int | None = None
    ) -> StoredQuiz:
        """
        Link a bank question into a quiz.

        Args:
            quiz_id: Quiz to change
            user_id: Caller, must own the quiz and the question
            question_id: Bank question to add
            order: Position to insert at (appended if omitted)

        Returns:
            The updated quiz
        """
        quiz = self._owned_quiz(quiz_id, user_id, "modify")
        self._owned_question(question_id, user_id)

        ids = quiz.question_ids
        if question_id in ids:
            raise ValueError("Question is already in this quiz")

        position = len(ids) if order is None else max(0, min(order, len(ids)))
        ids.insert(position, question_id)
        return self._relink(quiz, ids)

    def remove_question(self, quiz_id: str, user_id: str, question_id: str) -> StoredQuiz:
        """Unlink a question from a quiz; the question stays in the bank."""
        quiz = self._owned_quiz(quiz_id, user_id, "modify")
        ids = quiz.question_ids
        if question_id not in ids:
            raise NotFoundError("Question is not in this quiz")
        ids.remove(question_id)
        return self._relink(quiz, ids)

    def reorder_questions(self, quiz_id: str, user_id: str, question_ids: list[str]) -> StoredQuiz:
        """
        Set the order of every question in a quiz at once.

        Args:
            quiz_id: Quiz to change
            user_id: Caller, must own the quiz
            question_ids: All of the quiz's question ids in their new order

        Returns:
            The updated quiz
        """
        quiz = self._owned_quiz(quiz_id, user_id, "modify")
        if sorted(question_ids) != sorted(quiz.question_ids) or len(set(question_ids)) != len(
            question_ids
        ):
            raise ValueError("question_ids must list every question of the quiz exactly once")
        return self._relink(quiz, list(question_ids))

    # Question bank

    def save_question(self, author_id: str, question: Question, subject: str = "General") -> StoredQuestion:
        """Add a question to the author's bank."""
        stored = StoredQuestion(
            author_id=author_id,
            question_text=question.question_text,
            subject=subject,
            answers=[answer.model_copy() for answer in question.answers],
        )
        self._questions[stored.id] = stored
        return stored

    def get_question(self, question_id: str, user_id: str) -> StoredQuestion:
        """Return a bank question the user owns."""
        return self._owned_question(question_id, user_id)

    def get_bank(
        self,
        author_id: str,
        search: str | None = None,
        subject: str | None = None,
        starred_only: bool = False,
    ) -> list[StoredQuestion]:
        """
        Filter an author's question bank, newest first.

        Args:
            author_id: Owner of the bank
            search: Case-insensitive text to look for in the question
            subject: Exact subject to match
            starred_only: Only starred questions

        Returns:
            Matching questions
        """
        results = []
        for question in self._questions.values():
            if question.author_id != author_id:
                continue
            if search and search.lower() not in question.question_text.lower():
                continue
            if subject and question.subject != subject:
                continue
            if starred_only and not question.is_starred:
                continue
            results.append(question)
        ordered = sorted(enumerate(results), key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [question for _, question in ordered]

    def get_subjects(self, author_id: str) -> list[str]:
        """Distinct subjects in an author's bank, sorted."""
        return sorted({q.subject for q in self._questions.values() if q.author_id == author_id})

    def toggle_star(self, question_id: str, user_id: str) -> StoredQuestion:
        """Flip the starred flag of a bank question."""
        question = self._owned_question(question_id, user_id)
        question.is_starred = not question.is_starred
        question.updated_at = datetime.now()
        return question

    def update_question(
        self,
        question_id: str,
        user_id: str,
        question_text: str | None = None,
        answers: list[Answer] | None = None,
    ) -> StoredQuestion:
        """Change a bank question's text and/or answers."""
        question = self._owned_question(question_id, user_id)

        new_text = question.question_text if question_text is None else question_text
        new_answers = question.answers if answers is None else answers
        # validates answer count and correctness before anything is stored
        Question(question_text=new_text, answers=new_answers)

        question.question_text = new_text
        question.answers = [answer.model_copy() for answer in new_answers]
        question.updated_at = datetime.now()
        return question

    def delete_question(self, question_id: str, user_id: str) -> StoredQuestion:
        """Delete a bank question and unlink it from every quiz that uses it."""
        question = self._owned_question(question_id, user_id)

        for quiz in list(self._quizzes.values()):
            ids = quiz.question_ids
            if question_id in ids:
                ids.remove(question_id)
                self._relink(quiz, ids)

        del self._questions[question_id]
        return question

    def quizzes_using(self, question_id: str) -> list[StoredQuiz]:
        """Quizzes that contain the question."""
        return [q for q in self._quizzes.values() if question_id in q.question_ids]

    # Helpers

    def _owned_quiz(self, quiz_id: str, user_id: str, action: str) -> StoredQuiz:
        quiz = self._quizzes.get(quiz_id)
        if quiz is None or quiz.author_id != user_id:
            raise PermissionDeniedError(f"You don't have permission to {action} this quiz")
        return quiz

    def _owned_question(self, question_id: str, user_id: str) -> StoredQuestion:
        question = self._questions.get(question_id)
        if question is None:
            raise NotFoundError("Question not found")
        if question.author_id != user_id:
            raise PermissionDeniedError("You don't have permission to change this question")
        return question

    def _relink(self, quiz: StoredQuiz, question_ids: list[str]) -> StoredQuiz:
        quiz.questions = [
            QuizQuestionLink(quiz_id=quiz.id, question_id=qid, order=order)
            for order, qid in enumerate(question_ids)
        ]
        quiz.updated_at = datetime.now()
        return quiz
