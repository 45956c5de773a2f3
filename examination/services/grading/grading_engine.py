"""
Grading Engine

Pure functions that score a submitted answer against a question:

- grade(): automatic grading, run on every answer submission
- review(): manual score override by the exam creator

Neither function touches the database; callers persist the result.

Author: DSP Development Team
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .answer_keys import (
    AnswerKey,
    EssayKey,
    MultipleChoiceKey,
    TrueFalseKey,
    normalize_submitted_answer,
    parse_answer_key,
)
from ...exceptions import ValidationError


@dataclass(frozen=True)
class GradeResult:
    is_correct: Optional[bool]
    score: int
    needs_review: bool


def _grade_exact(question, key: AnswerKey, submitted: Any) -> GradeResult:
    if submitted == key.as_json():
        return GradeResult(is_correct=True, score=question.marks, needs_review=False)
    return GradeResult(is_correct=False, score=0, needs_review=False)


def _grade_essay(question, key: EssayKey, submitted: str) -> GradeResult:
    # Essays always go to the exam creator, even on a verbatim match
    return GradeResult(is_correct=None, score=0, needs_review=True)


_GRADERS: Dict[type, Callable[[Any, Any, Any], GradeResult]] = {
    MultipleChoiceKey: _grade_exact,
    TrueFalseKey: _grade_exact,
    EssayKey: _grade_essay,
}


def grade(question, submitted_answer: Any) -> GradeResult:
    """
    Grade a submitted answer.

    Args:
        question: Object with ``type``, ``options``, ``correct_answers`` and ``marks``
        submitted_answer: Raw value as sent by the student

    Returns:
        GradeResult with is_correct, score and needs_review

    Raises:
        ValidationError: If the answer or the question's key is malformed
    """
    options = question.options if isinstance(question.options, list) else None
    key = parse_answer_key(question.type, question.correct_answers, options)
    submitted = normalize_submitted_answer(question.type, submitted_answer, options)
    return _GRADERS[type(key)](question, key, submitted)


def validate_review_score(score: Any, marks: int) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError("Score must be an integer", details={"field": "score"})
    if not 0 <= score <= marks:
        raise ValidationError(
            f"Score must be between 0 and {marks}",
            details={"field": "score", "min": 0, "max": marks},
        )
    return score


def review(answer, score: Any, comment: Optional[str]):
    """
    Apply a manual review to an answer.

    Sets score and review comment and clears needs_review. ``is_correct`` is
    left as it was.

    Raises:
        ValidationError: If score is not an integer in [0, question.marks]
    """
    answer.score = validate_review_score(score, answer.question.marks)
    # Eine bewertete Antwort trägt immer einen Kommentar, ggf. leer
    answer.review_comment = comment if comment is not None else ""
    answer.needs_review = False
    return answer
