"""
Examination Application URL Configuration

All endpoints live below /api/examination/ (see backend/urls.py).

URL Structure:
- auth/, token/, user/: Registration, JWT token management, current user
- exams/, questions/: Exam and question management for creators
- submissions/, answers/, review-requests/: Taking exams and the review workflow

Author: DSP Development Team
Version: 1.0.0
"""

from typing import List
from django.urls import path, URLPattern
from rest_framework_simplejwt.views import TokenRefreshView, TokenVerifyView

# Import der Views
from .users import views as user_views
from .exams import views as exam_views
from .submissions import views as submission_views

app_name = "examination"

# --- Authentication and Token Management ---

auth_urlpatterns: List[URLPattern] = [
    path("auth/register/", user_views.RegisterView.as_view(), name="register"),
    path("auth/logout/", user_views.LogoutView.as_view(), name="logout"),
    path("token/", user_views.ExamTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("token/verify/", TokenVerifyView.as_view(), name="token_verify"),
    path("user/", user_views.CurrentUserView.as_view(), name="current-user"),
]

# --- Exam Management ---

exams_urlpatterns: List[URLPattern] = [
    path("exams/", exam_views.ExamListCreateView.as_view(), name="exam-list"),
    path("exams/<int:exam_id>/", exam_views.ExamDetailView.as_view(), name="exam-detail"),
    path("exams/code/<str:code>/", exam_views.ExamByCodeView.as_view(), name="exam-by-code"),
    path("exams/<int:exam_id>/questions/", exam_views.ExamQuestionsView.as_view(), name="exam-questions"),
    path("questions/<int:question_id>/", exam_views.QuestionDetailView.as_view(), name="question-detail"),
]

# --- Submissions and Reviews ---

submissions_urlpatterns: List[URLPattern] = [
    # Teilnehmer
    path("exams/<int:exam_id>/submissions/", submission_views.ExamSubmissionsView.as_view(), name="exam-submissions"),
    path("submissions/<int:submission_id>/", submission_views.SubmissionDetailView.as_view(), name="submission-detail"),
    path("submissions/<int:submission_id>/answers/", submission_views.SubmissionAnswersView.as_view(), name="submission-answers"),
    path("submissions/<int:submission_id>/complete/", submission_views.CompleteSubmissionView.as_view(), name="submission-complete"),
    path("user/submissions/", submission_views.MySubmissionsView.as_view(), name="my-submissions"),
    path("answers/<int:answer_id>/review-request/", submission_views.AnswerReviewRequestView.as_view(), name="answer-review-request"),

    # Ersteller
    path("exams/<int:exam_id>/results/", submission_views.ExamResultsView.as_view(), name="exam-results"),
    path("exams/<int:exam_id>/review-requests/", submission_views.ExamReviewRequestsView.as_view(), name="exam-review-requests"),
    path("answers/<int:answer_id>/review/", submission_views.ReviewAnswerView.as_view(), name="answer-review"),
    path("review-requests/<int:request_id>/reject/", submission_views.RejectReviewRequestView.as_view(), name="review-request-reject"),
]

urlpatterns: List[URLPattern] = auth_urlpatterns + exams_urlpatterns + submissions_urlpatterns
