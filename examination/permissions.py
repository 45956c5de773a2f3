from rest_framework.permissions import BasePermission

from .exceptions import AuthorizationError

# ------------------------------------------------------------
# Zugriffsprüfungen: reine Prädikate ohne Seiteneffekte.
# Die Services rufen sie bei jeder schreibenden Operation auf,
# die Views nutzen sie über die Permission-Klassen unten.
# ------------------------------------------------------------


def _user_id(user):
    # Accepts a user object or a plain id
    return getattr(user, "pk", user)


def is_exam_owner(user, exam) -> bool:
    return user is not None and _user_id(user) == exam.creator_id


def is_submission_owner(user, submission) -> bool:
    return user is not None and _user_id(user) == submission.user_id


def can_view_submission(user, submission, exam) -> bool:
    return is_submission_owner(user, submission) or is_exam_owner(user, exam)


def can_review(user, exam) -> bool:
    return is_exam_owner(user, exam)


def require(allowed: bool, message: str) -> None:
    """Translate a failed predicate into an AuthorizationError."""
    if not allowed:
        raise AuthorizationError(message)


class IsExamOwner(BasePermission):
    """Nur der Ersteller der Prüfung darf das Objekt bearbeiten."""

    message = "Only the creator of this exam may do this."

    def has_object_permission(self, request, view, obj):
        exam = getattr(obj, "exam", obj)
        return is_exam_owner(request.user, exam)


class IsExamOwnerOrReadOnly(IsExamOwner):
    """Lesezugriffe für alle angemeldeten Benutzer, Änderungen nur für den Ersteller."""

    def has_object_permission(self, request, view, obj):
        if request.method in ("GET", "HEAD", "OPTIONS"):
            return True
        return super().has_object_permission(request, view, obj)
