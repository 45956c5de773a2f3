import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ...permissions import IsExamOwnerOrReadOnly
from ...services.store import entity_store
from ..serializers import ExamSerializer, ExamWriteSerializer

logger = logging.getLogger(__name__)

__all__ = ["ExamListCreateView", "ExamDetailView", "ExamByCodeView"]


class ExamListCreateView(APIView):
    """
    GET: Prüfungen des angemeldeten Erstellers
    POST: Neue Prüfung anlegen, der Code wird serverseitig vergeben
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        exams = entity_store.get_exams_by_creator(request.user.pk).order_by("-created_at")
        return Response(ExamSerializer(exams, many=True).data)

    def post(self, request):
        serializer = ExamWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        exam = entity_store.create_exam(request.user, **serializer.validated_data)
        return Response(ExamSerializer(exam).data, status=status.HTTP_201_CREATED)


class ExamDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsExamOwnerOrReadOnly]

    def get_object(self, exam_id):
        exam = entity_store.get_exam(exam_id)
        self.check_object_permissions(self.request, exam)
        return exam

    def get(self, request, exam_id):
        return Response(ExamSerializer(self.get_object(exam_id)).data)

    def put(self, request, exam_id):
        return self._update(request, exam_id, partial=False)

    def patch(self, request, exam_id):
        return self._update(request, exam_id, partial=True)

    def _update(self, request, exam_id, partial):
        exam = self.get_object(exam_id)
        serializer = ExamWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        exam = entity_store.update_exam(exam.pk, **serializer.validated_data)
        return Response(ExamSerializer(exam).data)

    def delete(self, request, exam_id):
        exam = self.get_object(exam_id)
        entity_store.delete_exam(exam.pk)
        logger.info(f"Prüfung {exam_id} von Benutzer {request.user.pk} gelöscht")
        return Response(status=status.HTTP_204_NO_CONTENT)


class ExamByCodeView(APIView):
    """Prüfung über den Code finden, ohne Anmeldung."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, code):
        exam = entity_store.get_exam_by_code(code)
        return Response(ExamSerializer(exam).data)
