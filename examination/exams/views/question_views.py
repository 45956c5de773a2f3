from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ...permissions import IsExamOwner, is_exam_owner
from ...services.store import entity_store
from ..serializers import QuestionPublicSerializer, QuestionSerializer, QuestionWriteSerializer

__all__ = ["ExamQuestionsView", "QuestionDetailView"]


class ExamQuestionsView(APIView):
    """
    GET: Fragen einer Prüfung in Reihenfolge. Lösungen sieht nur der Ersteller.
    POST: Frage hinzufügen (nur Ersteller)
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, exam_id):
        exam = entity_store.get_exam(exam_id)
        questions = entity_store.get_questions_by_exam(exam.pk)
        serializer_class = QuestionSerializer if is_exam_owner(request.user, exam) else QuestionPublicSerializer
        return Response(serializer_class(questions, many=True).data)

    def post(self, request, exam_id):
        exam = entity_store.get_exam(exam_id)
        if not is_exam_owner(request.user, exam):
            self.permission_denied(request, message=IsExamOwner.message)

        serializer = QuestionWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        question = entity_store.create_question(exam, **serializer.validated_data)
        return Response(QuestionSerializer(question).data, status=status.HTTP_201_CREATED)


class QuestionDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsExamOwner]

    def get_object(self, question_id):
        question = entity_store.get_question(question_id)
        self.check_object_permissions(self.request, question)
        return question

    def get(self, request, question_id):
        return Response(QuestionSerializer(self.get_object(question_id)).data)

    def put(self, request, question_id):
        return self._update(request, question_id, partial=False)

    def patch(self, request, question_id):
        return self._update(request, question_id, partial=True)

    def _update(self, request, question_id, partial):
        question = self.get_object(question_id)
        serializer = QuestionWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        question = entity_store.update_question(question.pk, **serializer.validated_data)
        return Response(QuestionSerializer(question).data)

    def delete(self, request, question_id):
        question = self.get_object(question_id)
        entity_store.delete_question(question.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
