from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _
from django.core.validators import MinValueValidator

User = settings.AUTH_USER_MODEL


class QuestionType(models.TextChoices):
    ESSAY = "essay", _("Essay")
    MULTIPLE_CHOICE = "multipleChoice", _("Multiple choice")
    TRUE_FALSE = "trueFalse", _("True / false")


class Exam(models.Model):
    code = models.CharField(
        max_length=32,
        unique=True,
        editable=False,
        help_text=_("Public access code, generated once at creation."),
    )
    title = models.CharField(max_length=255)
    subject = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    instructions = models.TextField(blank=True, null=True)
    duration = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text=_("Time limit in minutes."),
    )
    attachment = models.CharField(
        max_length=500,
        blank=True,
        null=True,
        help_text=_("Reference to an uploaded file (URL or path)."),
    )
    creator = models.ForeignKey(User, on_delete=models.CASCADE, related_name="created_exams")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "exams"
        verbose_name = _("Exam")
        verbose_name_plural = _("Exams")
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.title} ({self.code})"

    @property
    def total_marks(self) -> int:
        return sum(q.marks for q in self.questions.all())


class Question(models.Model):
    exam = models.ForeignKey(Exam, on_delete=models.CASCADE, related_name="questions")
    type = models.CharField(max_length=20, choices=QuestionType.choices)
    text = models.TextField()
    options = models.JSONField(
        blank=True,
        null=True,
        help_text=_("Ordered list of options, required for multiple choice."),
    )
    correct_answers = models.JSONField(
        blank=True,
        null=True,
        help_text=_(
            'Multiple choice: ["<index>"]; true/false: true or false; '
            "essay: list of acceptable reference answers."
        ),
    )
    marks = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    order = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        db_table = "questions"
        verbose_name = _("Question")
        verbose_name_plural = _("Questions")
        ordering = ["exam", "order"]
        constraints = [
            models.UniqueConstraint(fields=["exam", "order"], name="unique_question_order_per_exam"),
        ]

    def __str__(self):
        return f"Q{self.order} ({self.get_type_display()}) of {self.exam.title}"
