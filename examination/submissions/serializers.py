from rest_framework import serializers

from ..exams.serializers import ExamSerializer
from ..users.serializers import UserSummarySerializer
from .models import Submission, Answer, ReviewRequest


class SubmissionSerializer(serializers.ModelSerializer):
    exam_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    status = serializers.CharField(read_only=True)
    deadline = serializers.DateTimeField(read_only=True)
    remaining_seconds = serializers.IntegerField(read_only=True)

    class Meta:
        model = Submission
        fields = [
            "id",
            "exam_id",
            "user_id",
            "start_time",
            "end_time",
            "score",
            "completed",
            "status",
            "duration",
            "deadline",
            "remaining_seconds",
        ]
        read_only_fields = fields


class TeacherSubmissionSerializer(SubmissionSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta(SubmissionSerializer.Meta):
        fields = SubmissionSerializer.Meta.fields + ["user"]
        read_only_fields = fields


class StudentSubmissionSerializer(SubmissionSerializer):
    exam = ExamSerializer(read_only=True)

    class Meta(SubmissionSerializer.Meta):
        fields = SubmissionSerializer.Meta.fields + ["exam"]
        read_only_fields = fields


class AnswerSerializer(serializers.ModelSerializer):
    submission_id = serializers.IntegerField(read_only=True)
    question_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Answer
        fields = [
            "id",
            "submission_id",
            "question_id",
            "answer",
            "is_correct",
            "score",
            "needs_review",
            "review_comment",
        ]
        read_only_fields = fields


class SubmitAnswerSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    answer = serializers.JSONField()


class ReviewRequestSerializer(serializers.ModelSerializer):
    answer_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    resolved_by_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = ReviewRequest
        fields = [
            "id",
            "answer_id",
            "user_id",
            "reason",
            "status",
            "created_at",
            "resolved_at",
            "resolved_by_id",
        ]
        read_only_fields = fields


class CreateReviewRequestSerializer(serializers.Serializer):
    reason = serializers.CharField()


class ReviewAnswerSerializer(serializers.Serializer):
    # Bereichsprüfung gegen question.marks erfolgt in der Bewertungslogik
    score = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ExamResultSerializer(serializers.Serializer):
    submission_id = serializers.IntegerField()
    user_id = serializers.IntegerField()
    username = serializers.CharField()
    name = serializers.CharField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField(allow_null=True)
    completed = serializers.BooleanField()
    score = serializers.IntegerField(allow_null=True)
    max_score = serializers.IntegerField()
    answered = serializers.IntegerField()
    needs_review = serializers.IntegerField()
    pending_review_requests = serializers.IntegerField()
