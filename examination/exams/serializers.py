from rest_framework import serializers

from .models import Exam, Question, QuestionType


class ExamSerializer(serializers.ModelSerializer):
    creator_id = serializers.IntegerField(read_only=True)
    question_count = serializers.SerializerMethodField()

    class Meta:
        model = Exam
        fields = [
            "id",
            "code",
            "title",
            "subject",
            "description",
            "instructions",
            "duration",
            "attachment",
            "creator_id",
            "created_at",
            "question_count",
        ]
        read_only_fields = ["id", "code", "creator_id", "created_at"]

    def get_question_count(self, obj: Exam) -> int:
        return obj.questions.count()


class ExamWriteSerializer(serializers.Serializer):
    """Eingabe für Erstellen und Aktualisieren; die Fachvalidierung macht der Entity Store."""

    title = serializers.CharField(max_length=255)
    subject = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    instructions = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    duration = serializers.IntegerField(min_value=1)
    attachment = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)


class QuestionSerializer(serializers.ModelSerializer):
    """Vollständige Frage inklusive Lösung - nur für den Ersteller."""

    exam_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Question
        fields = ["id", "exam_id", "type", "text", "options", "correct_answers", "marks", "order"]
        read_only_fields = fields


class QuestionPublicSerializer(serializers.ModelSerializer):
    """Frage ohne Lösung für Teilnehmer."""

    exam_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Question
        fields = ["id", "exam_id", "type", "text", "options", "marks", "order"]
        read_only_fields = fields


class QuestionWriteSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=QuestionType.choices)
    text = serializers.CharField()
    options = serializers.JSONField(required=False, allow_null=True)
    correct_answers = serializers.JSONField(required=False, allow_null=True)
    marks = serializers.IntegerField(min_value=1, required=False, default=1)
    order = serializers.IntegerField(min_value=1, required=False)
