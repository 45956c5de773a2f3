from .answer_keys import parse_answer_key, normalize_submitted_answer
from .grading_engine import GradeResult, grade, review

__all__ = [
    "parse_answer_key",
    "normalize_submitted_answer",
    "GradeResult",
    "grade",
    "review",
]
