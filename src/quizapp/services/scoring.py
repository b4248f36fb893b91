"""Scoring of a user's answers against a quiz definition.

Pure computation: the engine takes already loaded questions and answers
and never touches the database.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from quizapp.models.question import Question, QuestionType
from quizapp.repositories.user_answer import SubmittedAnswer


@dataclass(frozen=True)
class OptionResult:
    """Correctness and selection state of one option, for rendering."""

    id: int
    text: str
    is_correct: bool
    is_selected: bool


@dataclass(frozen=True)
class QuestionResult:
    """Outcome for a single question."""

    id: int
    text: str
    type: QuestionType
    is_correct: bool
    options: list[OptionResult] | None = None
    user_answer: str | None = None
    correct_text: str | None = None


@dataclass(frozen=True)
class ScoredQuiz:
    """Per-question outcomes in quiz order plus the aggregate count."""

    questions: list[QuestionResult] = field(default_factory=list)
    correct_answers: int = 0

    @property
    def total_questions(self) -> int:
        return len(self.questions)


def is_multiple_choice_correct(
    correct_option_ids: Iterable[int],
    selected_option_ids: Iterable[int] | None,
) -> bool:
    """Exact set equality; extra or missing selections are both wrong."""
    return frozenset(correct_option_ids) == frozenset(selected_option_ids or ())


def is_free_text_correct(expected: str | None, given: str | None) -> bool:
    """Trimmed, case-insensitive comparison; empty answers never match."""
    if not given or not expected:
        return False
    return given.strip().casefold() == expected.strip().casefold()


def build_question_result(
    question: Question,
    answer: SubmittedAnswer | None,
    is_correct: bool,
) -> QuestionResult:
    """Render a question's outcome with the details the UI shows."""
    if question.type == QuestionType.MULTIPLE_CHOICE:
        selected = (answer.selected_option_ids if answer else None) or frozenset()
        return QuestionResult(
            id=question.id,
            text=question.text,
            type=question.type,
            is_correct=is_correct,
            options=[
                OptionResult(
                    id=option.id,
                    text=option.text,
                    is_correct=option.is_correct,
                    is_selected=option.id in selected,
                )
                for option in question.options
            ],
        )

    return QuestionResult(
        id=question.id,
        text=question.text,
        type=question.type,
        is_correct=is_correct,
        user_answer=answer.text_answer if answer else None,
        correct_text=question.correct_text,
    )


class ScoringEngine:
    """Score a set of answers against the questions of a quiz."""

    def score_question(self, question: Question, answer: SubmittedAnswer | None) -> bool:
        """Decide whether a single answer is correct; a missing answer never is."""
        if answer is None:
            return False
        if question.type == QuestionType.MULTIPLE_CHOICE:
            return is_multiple_choice_correct(
                question.correct_option_ids, answer.selected_option_ids
            )
        return is_free_text_correct(question.correct_text, answer.text_answer)

    def score(
        self,
        questions: Sequence[Question],
        answers: Iterable[SubmittedAnswer],
    ) -> ScoredQuiz:
        """Score every question in order, counting unanswered ones as incorrect."""
        answers_by_question = {answer.question_id: answer for answer in answers}

        results: list[QuestionResult] = []
        correct_answers = 0
        for question in questions:
            answer = answers_by_question.get(question.id)
            is_correct = self.score_question(question, answer)
            if is_correct:
                correct_answers += 1
            results.append(build_question_result(question, answer, is_correct))

        return ScoredQuiz(questions=results, correct_answers=correct_answers)
