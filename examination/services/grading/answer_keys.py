"""
Answer Keys for the Grading Engine

The shape of ``Question.correct_answers`` and of a submitted answer depends on
the question type. This module turns the stored JSON into one explicit key
type per question type, so grading dispatches on the key type instead of
inspecting raw values:

- MultipleChoiceKey: zero-based index of the correct option (stored as ``["<index>"]``)
- TrueFalseKey: the correct boolean
- EssayKey: acceptable reference answers (any one match is sufficient)

It also validates question definitions before they are persisted and
normalises submitted answers (``"0"``, ``0`` and ``["0"]`` select the same
option; ``"true"`` and ``True`` are the same true/false answer).

Author: DSP Development Team
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from ...exams.models import QuestionType
from ...exceptions import ValidationError


@dataclass(frozen=True)
class MultipleChoiceKey:
    index: str

    def as_json(self) -> List[str]:
        return [self.index]


@dataclass(frozen=True)
class TrueFalseKey:
    value: bool

    def as_json(self) -> bool:
        return self.value


@dataclass(frozen=True)
class EssayKey:
    references: Tuple[str, ...]

    def as_json(self) -> List[str]:
        return list(self.references)


AnswerKey = Union[MultipleChoiceKey, TrueFalseKey, EssayKey]


def _option_index(value: Any, options: Optional[List[str]], field: str) -> str:
    """
    Convert ``"2"`` / ``2`` into the canonical index string ``"2"``.
    Booleans are rejected even though ``True == 1``.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an option index", details={"field": field})
    if isinstance(value, int):
        index = value
    elif isinstance(value, str) and value.strip().isdigit():
        index = int(value.strip())
    else:
        raise ValidationError(f"{field} must be an option index", details={"field": field})

    if options is not None and not 0 <= index < len(options):
        raise ValidationError(
            f"{field} refers to option {index}, but the question has {len(options)} options",
            details={"field": field},
        )
    return str(index)


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValidationError(f"{field} must be true or false", details={"field": field})


def validate_options(question_type: str, options: Any) -> Optional[List[str]]:
    """
    Options are required for multiple choice (at least two non-empty strings)
    and must be absent for the other question types.
    """
    if question_type == QuestionType.MULTIPLE_CHOICE:
        if not isinstance(options, list) or len(options) < 2:
            raise ValidationError(
                "Multiple choice questions need at least two options",
                details={"field": "options"},
            )
        if not all(isinstance(o, str) and o.strip() for o in options):
            raise ValidationError("Options must be non-empty strings", details={"field": "options"})
        return list(options)

    if options not in (None, []):
        raise ValidationError(
            f"Options are only allowed for multiple choice questions, not {question_type}",
            details={"field": "options"},
        )
    return None


def parse_answer_key(question_type: str, correct_answers: Any, options: Optional[List[str]] = None) -> AnswerKey:
    """
    Build the answer key for a question.

    Args:
        question_type: One of the QuestionType values
        correct_answers: Stored JSON value of ``Question.correct_answers``
        options: The question's options (multiple choice only)

    Returns:
        The key matching the question type

    Raises:
        ValidationError: If the stored value does not fit the question type
    """
    if question_type == QuestionType.MULTIPLE_CHOICE:
        if not isinstance(correct_answers, list) or len(correct_answers) != 1:
            raise ValidationError(
                "Multiple choice questions need exactly one correct option index",
                details={"field": "correct_answers"},
            )
        return MultipleChoiceKey(_option_index(correct_answers[0], options, "correct_answers"))

    if question_type == QuestionType.TRUE_FALSE:
        if isinstance(correct_answers, list) and len(correct_answers) == 1:
            # [true] is accepted as well as true
            correct_answers = correct_answers[0]
        return TrueFalseKey(_as_bool(correct_answers, "correct_answers"))

    if question_type == QuestionType.ESSAY:
        if isinstance(correct_answers, str):
            correct_answers = [correct_answers]
        if (
            not isinstance(correct_answers, list)
            or not correct_answers
            or not all(isinstance(a, str) and a.strip() for a in correct_answers)
        ):
            raise ValidationError(
                "Essay questions need at least one reference answer",
                details={"field": "correct_answers"},
            )
        return EssayKey(tuple(correct_answers))

    raise ValidationError(f"Unknown question type: {question_type}", details={"field": "type"})


def normalize_submitted_answer(question_type: str, raw: Any, options: Optional[List[str]] = None) -> Any:
    """
    Bring a submitted answer into the same shape as the answer key.

    - multipleChoice: ``["<index>"]``
    - trueFalse: ``bool``
    - essay: ``str``

    Raises:
        ValidationError: If the value cannot be an answer to this question type
    """
    if question_type == QuestionType.MULTIPLE_CHOICE:
        if isinstance(raw, list):
            if len(raw) != 1:
                raise ValidationError("Select exactly one option", details={"field": "answer"})
            raw = raw[0]
        return [_option_index(raw, options, "answer")]

    if question_type == QuestionType.TRUE_FALSE:
        if isinstance(raw, list) and len(raw) == 1:
            raw = raw[0]
        return _as_bool(raw, "answer")

    if question_type == QuestionType.ESSAY:
        if not isinstance(raw, str):
            raise ValidationError("Essay answers must be text", details={"field": "answer"})
        return raw

    raise ValidationError(f"Unknown question type: {question_type}", details={"field": "type"})


def validate_question_definition(question_type: str, options: Any, correct_answers: Any) -> Tuple[Optional[List[str]], Any]:
    """
    Validate a question's options and answer key together.

    Returns:
        Tuple of (options, correct_answers) in their canonical stored form
    """
    if question_type not in QuestionType.values:
        raise ValidationError(f"Unknown question type: {question_type}", details={"field": "type"})
    clean_options = validate_options(question_type, options)
    key = parse_answer_key(question_type, correct_answers, clean_options)
    return clean_options, key.as_json()
