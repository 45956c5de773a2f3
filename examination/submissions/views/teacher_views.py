from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from ...services.reviews import review_service
from ...services.submissions import submission_service
from ..serializers import (
    AnswerSerializer,
    ExamResultSerializer,
    ReviewAnswerSerializer,
    ReviewRequestSerializer,
)

__all__ = [
    "ExamResultsView",
    "ExamReviewRequestsView",
    "ReviewAnswerView",
    "RejectReviewRequestView",
]


class ExamResultsView(APIView):
    """Punktestände aller Versuche einer Prüfung inklusive offener Prüfungen."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, exam_id):
        results = submission_service.exam_results(exam_id, request.user.pk)
        return Response(ExamResultSerializer(results, many=True).data)


class ExamReviewRequestsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, exam_id):
        pending = review_service.list_pending_for_exam(exam_id, request.user.pk)
        return Response(ReviewRequestSerializer(pending, many=True).data)


class ReviewAnswerView(APIView):
    """
    Manuelle Bewertung einer Antwort durch den Ersteller.

    Request Body Example (JSON):
    {
        "score": 8,
        "comment": "Gute Argumentation, Beispiel fehlt."
    }
    """

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, answer_id):
        serializer = ReviewAnswerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        answer = review_service.review_answer(
            answer_id,
            request.user.pk,
            serializer.validated_data["score"],
            serializer.validated_data.get("comment"),
        )
        return Response(AnswerSerializer(answer).data)


class RejectReviewRequestView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, request_id):
        review_request = review_service.reject_review_request(request_id, request.user.pk)
        return Response(ReviewRequestSerializer(review_request).data)
