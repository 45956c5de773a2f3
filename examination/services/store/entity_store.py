"""
Entity Store für die Prüfungsplattform

Service für den Zugriff auf Users, Exams, Questions, Submissions, Answers und
ReviewRequests über das Django ORM. Jede Entität hat eine fortlaufende
Integer-ID, die nie wiederverwendet wird.

Contract:
- get-by-id / get-by-unique-field raise NotFoundError, never return an empty entity
- list-by-foreign-key returns querysets (questions ordered by ``order``)
- update-by-id is a partial merge over the allowed fields
- creation validates input and raises ValidationError before writing

Author: DSP Development Team
Version: 1.0.0
"""

import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils.crypto import get_random_string

from ...exams.models import Exam, Question
from ...submissions.models import Answer, ReviewRequest, Submission
from ...users.models import Profile
from ...exceptions import ConflictError, NotFoundError, ValidationError
from ..grading.answer_keys import validate_question_definition

logger = logging.getLogger(__name__)

User = get_user_model()

# [a-zA-Z0-9], 62 Zeichen
EXAM_CODE_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

EXAM_UPDATABLE_FIELDS = ("title", "subject", "description", "instructions", "duration", "attachment")
QUESTION_UPDATABLE_FIELDS = ("type", "text", "options", "correct_answers", "marks", "order")
# Felder, von denen die Bewertung bestehender Antworten abhängt
QUESTION_GRADING_FIELDS = ("type", "options", "correct_answers", "marks")


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", details={"field": field})
    return value


def _require_positive_int(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field} must be a positive integer", details={"field": field})
    return value


class EntityStore:
    """
    Service für Datenbankoperationen auf allen Prüfungs-Entitäten.
    """

    def __init__(self):
        self.logger = logger

    def _get(self, queryset, label: str, **lookup):
        try:
            return queryset.get(**lookup)
        except queryset.model.DoesNotExist:
            key = next(iter(lookup.values())) if lookup else None
            raise NotFoundError(f"{label} not found", resource_type=label, resource_id=key)

    # --- Users ---

    def get_user(self, user_id: int):
        return self._get(User.objects.all(), "User", pk=user_id)

    def get_user_by_username(self, username: str):
        return self._get(User.objects.all(), "User", username=username)

    def get_user_by_email(self, email: str):
        return self._get(User.objects.all(), "User", email__iexact=email)

    @transaction.atomic
    def create_user(self, username: str, name: str, email: str, password: str):
        """
        Create a user with a hashed password and a profile holding the name.

        Raises:
            ValidationError: On missing fields or a duplicate username/email
        """
        _require_text(username, "username")
        _require_text(email, "email")
        _require_text(password, "password")

        if User.objects.filter(username=username).exists():
            raise ValidationError("Username already exists", details={"field": "username"})
        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError("Email already exists", details={"field": "email"})

        user = User.objects.create_user(username=username, email=email, password=password)
        # Profil wurde bereits per post_save-Signal angelegt
        profile, _ = Profile.objects.get_or_create(user=user)
        profile.name = name or ""
        profile.save(update_fields=["name"])
        user.profile = profile
        self.logger.info(f"Neuer Benutzer erstellt: {username} (ID: {user.pk})")
        return user

    # --- Exams ---

    def generate_exam_code(self) -> str:
        """
        Draw a random exam code that no existing exam uses.

        Raises:
            ValidationError: If no free code was found within EXAM_CODE_MAX_ATTEMPTS draws
        """
        length = getattr(settings, "EXAM_CODE_LENGTH", 8)
        attempts = getattr(settings, "EXAM_CODE_MAX_ATTEMPTS", 10)
        for _ in range(attempts):
            code = get_random_string(length, EXAM_CODE_ALPHABET)
            if not Exam.objects.filter(code=code).exists():
                return code
            self.logger.warning(f"Exam code collision on {code}, retrying")
        raise ValidationError("Could not generate a unique exam code")

    def create_exam(
        self,
        creator,
        *,
        title: str,
        subject: str,
        duration: int,
        description: Optional[str] = None,
        instructions: Optional[str] = None,
        attachment: Optional[str] = None,
    ) -> Exam:
        _require_text(title, "title")
        _require_text(subject, "subject")
        _require_positive_int(duration, "duration")

        exam = Exam.objects.create(
            code=self.generate_exam_code(),
            title=title,
            subject=subject,
            duration=duration,
            description=description,
            instructions=instructions,
            attachment=attachment,
            creator=creator,
        )
        self.logger.info(f"Prüfung erstellt: {exam.title} (ID: {exam.pk}, Code: {exam.code})")
        return exam

    def get_exam(self, exam_id: int) -> Exam:
        return self._get(Exam.objects.select_related("creator"), "Exam", pk=exam_id)

    def get_exam_by_code(self, code: str) -> Exam:
        return self._get(Exam.objects.select_related("creator"), "Exam", code=code)

    def get_exams_by_creator(self, creator_id: int) -> QuerySet:
        return Exam.objects.filter(creator_id=creator_id)

    def update_exam(self, exam_id: int, **fields) -> Exam:
        """
        Partial update. Code, creator and creation time are immutable.
        """
        unknown = set(fields) - set(EXAM_UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )
        if "title" in fields:
            _require_text(fields["title"], "title")
        if "subject" in fields:
            _require_text(fields["subject"], "subject")
        if "duration" in fields:
            _require_positive_int(fields["duration"], "duration")

        exam = self.get_exam(exam_id)
        for name, value in fields.items():
            setattr(exam, name, value)
        exam.save(update_fields=list(fields) or None)
        self.logger.info(f"Prüfung aktualisiert: {exam.pk} ({', '.join(fields)})")
        return exam

    def delete_exam(self, exam_id: int) -> bool:
        exam = self.get_exam(exam_id)
        # Fragen, Versuche, Antworten und Anträge werden per CASCADE gelöscht
        exam.delete()
        self.logger.info(f"Prüfung gelöscht: {exam_id}")
        return True

    # --- Questions ---

    def _next_question_order(self, exam_id: int) -> int:
        last = Question.objects.filter(exam_id=exam_id).order_by("-order").values_list("order", flat=True).first()
        return (last or 0) + 1

    def create_question(
        self,
        exam: Exam,
        *,
        type: str,
        text: str,
        options=None,
        correct_answers=None,
        marks: int = 1,
        order: Optional[int] = None,
    ) -> Question:
        _require_text(text, "text")
        _require_positive_int(marks, "marks")
        if order is None:
            order = self._next_question_order(exam.pk)
        _require_positive_int(order, "order")
        options, correct_answers = validate_question_definition(type, options, correct_answers)

        try:
            with transaction.atomic():
                question = Question.objects.create(
                    exam=exam,
                    type=type,
                    text=text,
                    options=options,
                    correct_answers=correct_answers,
                    marks=marks,
                    order=order,
                )
        except IntegrityError:
            raise ValidationError(
                f"Order {order} is already used in this exam", details={"field": "order"}
            )
        self.logger.info(f"Frage {question.order} zu Prüfung {exam.pk} hinzugefügt ({type})")
        return question

    def get_question(self, question_id: int) -> Question:
        return self._get(Question.objects.select_related("exam"), "Question", pk=question_id)

    def get_questions_by_exam(self, exam_id: int) -> QuerySet:
        return Question.objects.filter(exam_id=exam_id).order_by("order")

    def update_question(self, question_id: int, **fields) -> Question:
        """
        Partial update. The merged question is validated as a whole, so a
        type change has to come with a matching answer key.

        Once the question has answers, only text and order may change.

        Raises:
            ValidationError: Invalid merged question or duplicate order
            ConflictError: Type, options, answer key or marks change on an answered question
        """
        unknown = set(fields) - set(QUESTION_UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                f"Fields cannot be updated: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )
        question = self.get_question(question_id)
        merged: Dict[str, Any] = {name: getattr(question, name) for name in QUESTION_UPDATABLE_FIELDS}
        merged.update(fields)

        _require_text(merged["text"], "text")
        _require_positive_int(merged["marks"], "marks")
        _require_positive_int(merged["order"], "order")
        merged["options"], merged["correct_answers"] = validate_question_definition(
            merged["type"], merged["options"], merged["correct_answers"]
        )

        changed = [name for name in QUESTION_GRADING_FIELDS if merged[name] != getattr(question, name)]
        if changed and question.answers.exists():
            raise ConflictError(
                "Question already has answers, its grading cannot be changed",
                details={"question_id": question.pk, "fields": changed},
            )

        for name, value in merged.items():
            setattr(question, name, value)
        try:
            with transaction.atomic():
                question.save()
        except IntegrityError:
            raise ValidationError(
                f"Order {merged['order']} is already used in this exam", details={"field": "order"}
            )
        self.logger.info(f"Frage aktualisiert: {question.pk}")
        return question

    @transaction.atomic
    def delete_question(self, question_id: int) -> bool:
        """
        Delete a question with its answers. Completed submissions that
        answered it get their score recomputed in the same transaction.
        """
        question = self.get_question(question_id)
        submission_ids = list(
            Answer.objects.filter(question=question, submission__completed=True)
            .values_list("submission_id", flat=True)
        )
        affected = list(
            Submission.objects.select_for_update().filter(pk__in=submission_ids).order_by("pk")
        )
        question.delete()
        for submission in affected:
            submission.score = submission.current_total()
            submission.save(update_fields=["score"])
        self.logger.info(
            f"Frage gelöscht: {question_id} ({len(affected)} abgeschlossene Versuche neu berechnet)"
        )
        return True

    # --- Submissions ---

    def create_submission(self, exam: Exam, user) -> Submission:
        return Submission.objects.create(exam=exam, user=user, duration=exam.duration)

    def get_submission(self, submission_id: int, lock: bool = False) -> Submission:
        """
        Args:
            lock: Take a row lock (``SELECT ... FOR UPDATE``); only valid inside a transaction
        """
        queryset = Submission.objects.select_related("exam", "user")
        if lock:
            queryset = queryset.select_for_update()
        return self._get(queryset, "Submission", pk=submission_id)

    def get_submissions_by_exam(self, exam_id: int) -> QuerySet:
        return Submission.objects.filter(exam_id=exam_id).select_related("user", "user__profile")

    def get_submissions_by_user(self, user_id: int) -> QuerySet:
        return Submission.objects.filter(user_id=user_id).select_related("exam")

    def get_active_submissions(self, exam_id: int, user_id: int) -> QuerySet:
        return Submission.objects.filter(
            exam_id=exam_id, user_id=user_id, completed=False
        ).select_related("exam")

    # --- Answers ---

    def get_answer(self, answer_id: int, lock: bool = False) -> Answer:
        queryset = Answer.objects.select_related("question", "submission", "submission__exam")
        if lock:
            queryset = queryset.select_for_update()
        return self._get(queryset, "Answer", pk=answer_id)

    def get_answers_by_submission(self, submission_id: int) -> QuerySet:
        return Answer.objects.filter(submission_id=submission_id).select_related("question")

    # --- Review requests ---

    def create_review_request(self, answer: Answer, user, reason: str) -> ReviewRequest:
        return ReviewRequest.objects.create(answer=answer, user=user, reason=reason)

    def get_review_request(self, request_id: int, lock: bool = False) -> ReviewRequest:
        queryset = ReviewRequest.objects.select_related(
            "answer", "answer__question", "answer__submission", "answer__submission__exam"
        )
        if lock:
            queryset = queryset.select_for_update()
        return self._get(queryset, "ReviewRequest", pk=request_id)

    def get_review_requests_by_answer(self, answer_id: int) -> QuerySet:
        return ReviewRequest.objects.filter(answer_id=answer_id)

    def get_pending_review_requests_by_exam(self, exam_id: int) -> QuerySet:
        return ReviewRequest.objects.filter(
            answer__submission__exam_id=exam_id,
            status=ReviewRequest.Status.PENDING,
        ).select_related("answer", "answer__question", "user")


entity_store = EntityStore()
