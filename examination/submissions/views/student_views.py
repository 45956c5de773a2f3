from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ...services.reviews import review_service
from ...services.submissions import submission_service
from ..serializers import (
    AnswerSerializer,
    CreateReviewRequestSerializer,
    ReviewRequestSerializer,
    StudentSubmissionSerializer,
    SubmissionSerializer,
    SubmitAnswerSerializer,
    TeacherSubmissionSerializer,
)

__all__ = [
    "ExamSubmissionsView",
    "SubmissionDetailView",
    "SubmissionAnswersView",
    "CompleteSubmissionView",
    "MySubmissionsView",
    "AnswerReviewRequestView",
]


class ExamSubmissionsView(APIView):
    """
    POST: Versuch für die Prüfung starten
    GET: Alle Versuche der Prüfung mit Teilnehmerdaten (nur Ersteller)
    """

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, exam_id):
        submission = submission_service.create_submission(exam_id, request.user.pk)
        return Response(SubmissionSerializer(submission).data, status=status.HTTP_201_CREATED)

    def get(self, request, exam_id):
        submissions = submission_service.list_exam_submissions(exam_id, request.user.pk)
        return Response(TeacherSubmissionSerializer(submissions, many=True).data)


class SubmissionDetailView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, submission_id):
        submission = submission_service.get_submission(submission_id, request.user.pk)
        return Response(SubmissionSerializer(submission).data)


class SubmissionAnswersView(APIView):
    """
    GET: Antworten des Versuchs
    POST: Antwort auf eine Frage abgeben oder überschreiben, wird sofort bewertet
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, submission_id):
        answers = submission_service.get_answers(submission_id, request.user.pk)
        return Response(AnswerSerializer(answers, many=True).data)

    def post(self, request, submission_id):
        serializer = SubmitAnswerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        answer = submission_service.submit_answer(
            submission_id,
            serializer.validated_data["question_id"],
            serializer.validated_data["answer"],
            request.user.pk,
        )
        return Response(AnswerSerializer(answer).data, status=status.HTTP_200_OK)


class CompleteSubmissionView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, submission_id):
        submission = submission_service.complete_submission(submission_id, request.user.pk)
        return Response(SubmissionSerializer(submission).data, status=status.HTTP_200_OK)


class MySubmissionsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        submissions = submission_service.list_user_submissions(request.user.pk)
        return Response(StudentSubmissionSerializer(submissions, many=True).data)


class AnswerReviewRequestView(APIView):
    """
    POST: Überprüfung einer Antwort beantragen (nur Teilnehmer)
    GET: Anträge zur Antwort (Teilnehmer oder Ersteller)
    """

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, answer_id):
        serializer = CreateReviewRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review_request = review_service.request_review(
            answer_id, request.user.pk, serializer.validated_data["reason"]
        )
        return Response(ReviewRequestSerializer(review_request).data, status=status.HTTP_201_CREATED)

    def get(self, request, answer_id):
        requests = review_service.get_review_requests(answer_id, request.user.pk)
        return Response(ReviewRequestSerializer(requests, many=True).data)
