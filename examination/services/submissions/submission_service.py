"""
Submission State Machine

Governs a single student's attempt at an exam:

    NotStarted --start--> InProgress --answer--> InProgress --complete--> Completed

- create_submission(): start an attempt (at most one active attempt per exam and user)
- submit_answer(): upsert and auto-grade the answer to one question
- complete_submission(): sum the answer scores and close the attempt, exactly once

The time limit is enforced server-side: an answer arriving after
``start_time + duration`` (the exam duration frozen at start, plus
EXAM_DEADLINE_GRACE_SECONDS) is refused.
Every mutating operation runs in one transaction with the submission row
locked, so concurrent answers to the same question serialize (last write
wins) and completion sums a consistent set of answers.

Author: DSP Development Team
Version: 1.0.0
"""

import logging
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from ...exceptions import (
    AuthorizationError,
    ConflictError,
    SubmissionExpiredError,
    ValidationError,
)
from ...permissions import can_view_submission, is_exam_owner, is_submission_owner, require
from ...submissions.models import Answer, ReviewRequest, Submission
from ...users.models import display_name
from ..grading import grade
from ..store import entity_store

logger = logging.getLogger(__name__)

User = get_user_model()


class SubmissionService:
    """
    Service für den Lebenszyklus von Prüfungsversuchen.
    """

    def __init__(self, store=None):
        self.store = store or entity_store
        self.logger = logger

    # --- Transitions ---

    def create_submission(self, exam_id: int, caller_id: int) -> Submission:
        """
        Start a new attempt.

        Raises:
            NotFoundError: If the exam does not exist
            AuthorizationError: If the caller is not a known user
            ConflictError: If the caller already has an unexpired attempt in progress
        """
        with transaction.atomic():
            exam = self.store.get_exam(exam_id)
            try:
                # Sperre auf den Benutzer serialisiert parallele Starts
                user = User.objects.select_for_update().get(pk=caller_id)
            except User.DoesNotExist:
                raise AuthorizationError("Authentication required")

            if getattr(settings, "EXAM_SINGLE_ACTIVE_SUBMISSION", True):
                active = list(self.store.get_active_submissions(exam.pk, user.pk))
                running = [s for s in active if not s.is_expired()]
                if running:
                    raise ConflictError(
                        "You already have an attempt in progress for this exam",
                        details={"submission_id": running[0].pk},
                    )
                for stale in active:
                    self._finalize(stale)
                    self.logger.info(f"Abgelaufener Versuch {stale.pk} vor Neustart abgeschlossen")

            submission = self.store.create_submission(exam, user)

        self.logger.info(
            f"Versuch {submission.pk} gestartet: Prüfung {exam.pk} von Benutzer {user.pk}"
        )
        return submission

    def submit_answer(self, submission_id: int, question_id: int, raw_answer: Any, caller_id: int) -> Answer:
        """
        Save and grade the answer to one question. Answering the same
        question again replaces the previous answer and grades it again,
        dropping any earlier manual score. While a review request for the
        answer is still pending, the answer stays flagged for review.

        Raises:
            NotFoundError: Unknown submission or question
            AuthorizationError: Caller does not own the submission
            ConflictError: Submission already completed
            SubmissionExpiredError: Deadline has passed
            ValidationError: Question belongs to another exam or answer is malformed
        """
        with transaction.atomic():
            submission = self.store.get_submission(submission_id, lock=True)
            require(
                is_submission_owner(caller_id, submission),
                "Not authorized to add answers to this submission",
            )
            self._ensure_open(submission)

            question = self.store.get_question(question_id)
            if question.exam_id != submission.exam_id:
                raise ValidationError(
                    "Question does not belong to this exam",
                    details={"question_id": question_id, "exam_id": submission.exam_id},
                )

            result = grade(question, raw_answer)
            disputed = ReviewRequest.objects.filter(
                answer__submission=submission,
                answer__question=question,
                status=ReviewRequest.Status.PENDING,
            ).exists()
            answer, created = Answer.objects.update_or_create(
                submission=submission,
                question=question,
                defaults={
                    "answer": raw_answer,
                    "is_correct": result.is_correct,
                    "score": result.score,
                    "needs_review": result.needs_review or disputed,
                    "review_comment": None,
                },
            )

        self.logger.info(
            f"Antwort {'gespeichert' if created else 'überschrieben'}: Versuch {submission.pk}, "
            f"Frage {question.pk}, Punkte {result.score}/{question.marks}"
            f"{' (Prüfung erforderlich)' if result.needs_review else ''}"
        )
        return answer

    def complete_submission(self, submission_id: int, caller_id: int) -> Submission:
        """
        Close the attempt and set its score to the sum of the answer scores.
        Essay answers still waiting for review count as 0.

        Raises:
            NotFoundError: Unknown submission
            AuthorizationError: Caller does not own the submission
            ConflictError: Submission already completed
        """
        with transaction.atomic():
            submission = self.store.get_submission(submission_id, lock=True)
            require(
                is_submission_owner(caller_id, submission),
                "Not authorized to complete this submission",
            )
            if submission.completed:
                raise ConflictError(
                    "Submission already completed", details={"submission_id": submission.pk}
                )
            self._finalize(submission)

        self.logger.info(f"Versuch {submission.pk} abgeschlossen mit {submission.score} Punkten")
        return submission

    def close_expired_submissions(self, now=None) -> int:
        """
        Complete every in-progress submission whose deadline has passed.

        Returns:
            Number of submissions closed
        """
        now = now or timezone.now()
        closed = 0
        candidates = Submission.objects.filter(completed=False).select_related("exam")
        for candidate in candidates:
            if not candidate.is_expired(now):
                continue
            with transaction.atomic():
                submission = self.store.get_submission(candidate.pk, lock=True)
                if submission.completed:
                    continue
                self._finalize(submission)
            closed += 1
            self.logger.info(f"Abgelaufener Versuch {submission.pk} automatisch abgeschlossen")
        return closed

    def _finalize(self, submission: Submission) -> Submission:
        submission.score = submission.current_total()
        submission.end_time = timezone.now()
        submission.completed = True
        submission.save(update_fields=["score", "end_time", "completed"])
        return submission

    def recompute_score(self, submission: Submission) -> Optional[int]:
        """
        Refresh the stored score of a completed submission after a review.
        In-progress submissions are left alone; completion sums them anyway.
        """
        if not submission.completed:
            return None
        submission.score = submission.current_total()
        submission.save(update_fields=["score"])
        return submission.score

    def _ensure_open(self, submission: Submission) -> None:
        if submission.completed:
            raise ConflictError(
                "Submission already completed", details={"submission_id": submission.pk}
            )
        if submission.is_expired():
            self.logger.warning(f"Antwort nach Fristablauf abgelehnt: Versuch {submission.pk}")
            raise SubmissionExpiredError(submission.pk, submission.deadline)

    # --- Reads ---

    def get_submission(self, submission_id: int, caller_id: int) -> Submission:
        submission = self.store.get_submission(submission_id)
        require(
            can_view_submission(caller_id, submission, submission.exam),
            "Not authorized to view this submission",
        )
        return submission

    def get_answers(self, submission_id: int, caller_id: int) -> QuerySet:
        submission = self.get_submission(submission_id, caller_id)
        return self.store.get_answers_by_submission(submission.pk)

    def list_exam_submissions(self, exam_id: int, caller_id: int) -> QuerySet:
        exam = self.store.get_exam(exam_id)
        require(is_exam_owner(caller_id, exam), "Not authorized to view these submissions")
        return self.store.get_submissions_by_exam(exam.pk)

    def list_user_submissions(self, caller_id: int) -> QuerySet:
        return self.store.get_submissions_by_user(caller_id)

    def exam_results(self, exam_id: int, caller_id: int) -> List[Dict[str, Any]]:
        """
        Per-submission totals for the exam creator, including how many
        answers still wait for a manual review.
        """
        exam = self.store.get_exam(exam_id)
        require(is_exam_owner(caller_id, exam), "Not authorized to view these results")
        max_score = exam.total_marks

        submissions = self.store.get_submissions_by_exam(exam.pk).annotate(
            answered=Count("answers", distinct=True),
            needs_review=Count("answers", filter=Q(answers__needs_review=True), distinct=True),
            pending_requests=Count(
                "answers__review_requests",
                filter=Q(answers__review_requests__status=ReviewRequest.Status.PENDING),
                distinct=True,
            ),
        )
        results = []
        for submission in submissions:
            results.append({
                "submission_id": submission.pk,
                "user_id": submission.user_id,
                "username": submission.user.username,
                "name": display_name(submission.user),
                "start_time": submission.start_time,
                "end_time": submission.end_time,
                "completed": submission.completed,
                "score": submission.score,
                "max_score": max_score,
                "answered": submission.answered,
                "needs_review": submission.needs_review,
                "pending_review_requests": submission.pending_requests,
            })
        return results


submission_service = SubmissionService()
