"""
Review Workflow

Students dispute the score of an answer; the exam creator resolves the
dispute by reviewing the answer or rejects it.

ReviewRequest states: pending -> resolved | rejected (both terminal).

- request_review(): submission owner opens a pending request, answer is flagged
- review_answer(): exam creator sets score and comment, all pending requests
  of the answer become resolved
- reject_review_request(): exam creator closes one pending request without
  changing the score

Score policy: when a reviewed answer belongs to a completed submission, the
submission's score is recomputed from the current answer scores in the same
transaction. End time and the completed flag are never touched here.

Author: DSP Development Team
Version: 1.0.0
"""

import logging
from typing import Any, Optional

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from ...exceptions import ConflictError, ValidationError
from ...permissions import can_review, can_view_submission, is_submission_owner, require
from ...submissions.models import Answer, ReviewRequest
from ..grading import review
from ..store import entity_store
from ..submissions import submission_service

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Service für Überprüfungsanträge und manuelle Bewertung.
    """

    def __init__(self, store=None, submissions=None):
        self.store = store or entity_store
        self.submissions = submissions or submission_service
        self.logger = logger

    def _lock_answer(self, answer_id: int):
        # Gleiche Sperrreihenfolge wie SubmissionService: erst Versuch, dann Antwort
        submission_id = self.store.get_answer(answer_id).submission_id
        submission = self.store.get_submission(submission_id, lock=True)
        answer = self.store.get_answer(answer_id, lock=True)
        return answer, submission

    def request_review(self, answer_id: int, caller_id: int, reason: str) -> ReviewRequest:
        """
        Open a review request for an answer.

        Raises:
            NotFoundError: Unknown answer
            AuthorizationError: Caller does not own the answer's submission
            ValidationError: Empty reason
        """
        if not isinstance(reason, str) or not reason.strip():
            raise ValidationError("A reason is required", details={"field": "reason"})

        with transaction.atomic():
            answer, submission = self._lock_answer(answer_id)
            require(
                is_submission_owner(caller_id, submission),
                "Not authorized to request review for this answer",
            )
            answer.needs_review = True
            answer.save(update_fields=["needs_review"])
            request = self.store.create_review_request(answer, submission.user, reason)

        self.logger.info(
            f"Überprüfung beantragt: Antwort {answer.pk} (Antrag {request.pk}) von Benutzer {caller_id}"
        )
        return request

    def review_answer(self, answer_id: int, caller_id: int, score: Any, comment: Optional[str]) -> Answer:
        """
        Manually grade an answer and resolve its pending review requests.

        Raises:
            NotFoundError: Unknown answer
            AuthorizationError: Caller did not create the exam
            ValidationError: Score outside [0, question.marks]
        """
        with transaction.atomic():
            answer, submission = self._lock_answer(answer_id)
            require(can_review(caller_id, submission.exam), "Not authorized to review this answer")

            review(answer, score, comment)
            answer.save(update_fields=["score", "review_comment", "needs_review"])

            resolved = ReviewRequest.objects.filter(
                answer=answer, status=ReviewRequest.Status.PENDING
            ).update(
                status=ReviewRequest.Status.RESOLVED,
                resolved_at=timezone.now(),
                resolved_by_id=caller_id,
            )
            total = self.submissions.recompute_score(submission)

        self.logger.info(
            f"Antwort {answer.pk} bewertet: {answer.score}/{answer.question.marks} "
            f"({resolved} Anträge erledigt)"
            f"{f', Versuch {submission.pk} neu berechnet: {total}' if total is not None else ''}"
        )
        return answer

    def reject_review_request(self, request_id: int, caller_id: int) -> ReviewRequest:
        """
        Close a pending review request without changing the score.

        The answer's needs_review flag is cleared once no pending request is
        left, unless the answer is an essay that was never graded.

        Raises:
            NotFoundError: Unknown review request
            AuthorizationError: Caller did not create the exam
            ConflictError: Request is not pending
        """
        with transaction.atomic():
            answer, submission = self._lock_answer(self.store.get_review_request(request_id).answer_id)
            request = self.store.get_review_request(request_id, lock=True)
            require(
                can_review(caller_id, submission.exam),
                "Not authorized to reject this review request",
            )
            if not request.is_pending:
                raise ConflictError(
                    f"Review request is already {request.status}",
                    details={"review_request_id": request.pk, "status": request.status},
                )

            request.status = ReviewRequest.Status.REJECTED
            request.resolved_at = timezone.now()
            request.resolved_by_id = caller_id
            request.save(update_fields=["status", "resolved_at", "resolved_by"])

            still_pending = ReviewRequest.objects.filter(
                answer=answer, status=ReviewRequest.Status.PENDING
            ).exists()
            ungraded_essay = answer.is_correct is None and answer.review_comment is None
            if answer.needs_review and not still_pending and not ungraded_essay:
                answer.needs_review = False
                answer.save(update_fields=["needs_review"])

        self.logger.info(f"Überprüfungsantrag {request.pk} abgelehnt von Benutzer {caller_id}")
        return request

    # --- Reads ---

    def get_review_requests(self, answer_id: int, caller_id: int) -> QuerySet:
        answer = self.store.get_answer(answer_id)
        require(
            can_view_submission(caller_id, answer.submission, answer.submission.exam),
            "Not authorized to view these review requests",
        )
        return self.store.get_review_requests_by_answer(answer.pk)

    def list_pending_for_exam(self, exam_id: int, caller_id: int) -> QuerySet:
        exam = self.store.get_exam(exam_id)
        require(can_review(caller_id, exam), "Not authorized to view these review requests")
        return self.store.get_pending_review_requests_by_exam(exam.pk)


review_service = ReviewService()
