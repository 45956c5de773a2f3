from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _
from django.core.validators import MinValueValidator
from django.db.models import Sum
from django.utils import timezone
import datetime

from ..exams.models import Exam, Question

User = settings.AUTH_USER_MODEL


class Submission(models.Model):
    class Status(models.TextChoices):
        IN_PROGRESS = "inProgress", _("In progress")
        COMPLETED = "completed", _("Completed")

    exam = models.ForeignKey(Exam, on_delete=models.CASCADE, related_name="submissions")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="submissions")
    start_time = models.DateTimeField(default=timezone.now, editable=False)
    end_time = models.DateTimeField(null=True, blank=True)
    score = models.IntegerField(
        null=True,
        blank=True,
        help_text=_("Sum of answer scores, set at completion and after each review."),
    )
    completed = models.BooleanField(default=False)
    duration = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text=_("Exam duration in minutes, frozen when the attempt starts."),
    )

    class Meta:
        db_table = "submissions"
        verbose_name = _("Submission")
        verbose_name_plural = _("Submissions")
        ordering = ["-start_time", "-id"]
        indexes = [
            models.Index(fields=["exam", "user"], name="submissions_exam_user_idx"),
        ]

    def __str__(self):
        return f"Submission {self.pk} for {self.exam.title} by {self.user.username}"

    @property
    def status(self) -> str:
        return self.Status.COMPLETED if self.completed else self.Status.IN_PROGRESS

    @property
    def deadline(self):
        grace = getattr(settings, "EXAM_DEADLINE_GRACE_SECONDS", 0)
        return self.start_time + datetime.timedelta(minutes=self.duration, seconds=grace)

    def is_expired(self, now=None) -> bool:
        return (now or timezone.now()) > self.deadline

    @property
    def remaining_seconds(self):
        if self.completed:
            return 0
        return max(0, int((self.deadline - timezone.now()).total_seconds()))

    def current_total(self) -> int:
        """Sum of the current answer scores, unset scores counting as 0."""
        # Sum() ignoriert NULL-Werte
        return self.answers.aggregate(total=Sum("score"))["total"] or 0


class Answer(models.Model):
    submission = models.ForeignKey(Submission, on_delete=models.CASCADE, related_name="answers")
    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="answers")
    answer = models.JSONField(help_text=_("Raw submitted value: string, list of strings or boolean."))
    is_correct = models.BooleanField(null=True, blank=True)
    score = models.IntegerField(null=True, blank=True, validators=[MinValueValidator(0)])
    needs_review = models.BooleanField(default=False)
    review_comment = models.TextField(null=True, blank=True)

    class Meta:
        db_table = "answers"
        verbose_name = _("Answer")
        verbose_name_plural = _("Answers")
        ordering = ["submission", "question__order"]
        constraints = [
            models.UniqueConstraint(
                fields=["submission", "question"], name="unique_answer_per_question"
            ),
        ]

    def __str__(self):
        return f"Answer to Q{self.question.order} in submission {self.submission_id}: {self.score}/{self.question.marks}"


class ReviewRequest(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        RESOLVED = "resolved", _("Resolved")
        REJECTED = "rejected", _("Rejected")

    answer = models.ForeignKey(Answer, on_delete=models.CASCADE, related_name="review_requests")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="review_requests")
    reason = models.TextField()
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    resolved_at = models.DateTimeField(null=True, blank=True)
    resolved_by = models.ForeignKey(
        User,
        related_name="resolved_review_requests",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
    )

    class Meta:
        db_table = "review_requests"
        verbose_name = _("Review Request")
        verbose_name_plural = _("Review Requests")
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"Review request {self.pk} for answer {self.answer_id} ({self.status})"

    @property
    def is_pending(self) -> bool:
        return self.status == self.Status.PENDING
