import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Exam",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(editable=False, help_text="Public access code, generated once at creation.", max_length=32, unique=True)),
                ("title", models.CharField(max_length=255)),
                ("subject", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("instructions", models.TextField(blank=True, null=True)),
                ("duration", models.PositiveIntegerField(help_text="Time limit in minutes.", validators=[django.core.validators.MinValueValidator(1)])),
                ("attachment", models.CharField(blank=True, help_text="Reference to an uploaded file (URL or path).", max_length=500, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("creator", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="created_exams", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Exam",
                "verbose_name_plural": "Exams",
                "db_table": "exams",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(choices=[("essay", "Essay"), ("multipleChoice", "Multiple choice"), ("trueFalse", "True / false")], max_length=20)),
                ("text", models.TextField()),
                ("options", models.JSONField(blank=True, help_text="Ordered list of options, required for multiple choice.", null=True)),
                ("correct_answers", models.JSONField(blank=True, help_text='Multiple choice: ["<index>"]; true/false: true or false; essay: list of acceptable reference answers.', null=True)),
                ("marks", models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("order", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="questions", to="examination.exam")),
            ],
            options={
                "verbose_name": "Question",
                "verbose_name_plural": "Questions",
                "db_table": "questions",
                "ordering": ["exam", "order"],
            },
        ),
        migrations.AddConstraint(
            model_name="question",
            constraint=models.UniqueConstraint(fields=("exam", "order"), name="unique_question_order_per_exam"),
        ),
        migrations.CreateModel(
            name="Submission",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_time", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("end_time", models.DateTimeField(blank=True, null=True)),
                ("score", models.IntegerField(blank=True, help_text="Sum of answer scores, set at completion and after each review.", null=True)),
                ("completed", models.BooleanField(default=False)),
                ("duration", models.PositiveIntegerField(help_text="Exam duration in minutes, frozen when the attempt starts.", validators=[django.core.validators.MinValueValidator(1)])),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="submissions", to="examination.exam")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="submissions", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Submission",
                "verbose_name_plural": "Submissions",
                "db_table": "submissions",
                "ordering": ["-start_time", "-id"],
            },
        ),
        migrations.AddIndex(
            model_name="submission",
            index=models.Index(fields=["exam", "user"], name="submissions_exam_user_idx"),
        ),
        migrations.CreateModel(
            name="Answer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("answer", models.JSONField(help_text="Raw submitted value: string, list of strings or boolean.")),
                ("is_correct", models.BooleanField(blank=True, null=True)),
                ("score", models.IntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ("needs_review", models.BooleanField(default=False)),
                ("review_comment", models.TextField(blank=True, null=True)),
                ("question", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="answers", to="examination.question")),
                ("submission", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="answers", to="examination.submission")),
            ],
            options={
                "verbose_name": "Answer",
                "verbose_name_plural": "Answers",
                "db_table": "answers",
                "ordering": ["submission", "question__order"],
            },
        ),
        migrations.AddConstraint(
            model_name="answer",
            constraint=models.UniqueConstraint(fields=("submission", "question"), name="unique_answer_per_question"),
        ),
        migrations.CreateModel(
            name="ReviewRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reason", models.TextField()),
                ("status", models.CharField(choices=[("pending", "Pending"), ("resolved", "Resolved"), ("rejected", "Rejected")], default="pending", max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("resolved_at", models.DateTimeField(blank=True, null=True)),
                ("answer", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="review_requests", to="examination.answer")),
                ("resolved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="resolved_review_requests", to=settings.AUTH_USER_MODEL)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="review_requests", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Review Request",
                "verbose_name_plural": "Review Requests",
                "db_table": "review_requests",
                "ordering": ["created_at", "id"],
            },
        ),
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(blank=True, default="", help_text="Display name of the user", max_length=255, verbose_name="Name")),
                ("user", models.OneToOneField(help_text="Associated user account", on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "User Profile",
                "verbose_name_plural": "User Profiles",
                "db_table": "examination_profile",
            },
        ),
    ]
