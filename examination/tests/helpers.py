"""
Gemeinsame Hilfsfunktionen für die Examination-Tests.
"""

import datetime

from django.contrib.auth.models import User
from django.utils import timezone

from examination.exams.models import QuestionType
from examination.services.store import entity_store
from examination.submissions.models import Submission


def make_user(username, name=None, password="Musterpassword"):
    user = User.objects.create_user(
        username=username, email=f"{username}@test.com", password=password
    )
    user.profile.name = name or username.capitalize()
    user.profile.save()
    return user


def make_exam(creator, duration=30, title="Geographie", subject="Erdkunde"):
    return entity_store.create_exam(creator, title=title, subject=subject, duration=duration)


def add_multiple_choice(exam, marks=10, correct="0", options=None):
    return entity_store.create_question(
        exam,
        type=QuestionType.MULTIPLE_CHOICE,
        text="What is the capital of France?",
        options=options or ["Paris", "Lyon", "Nice"],
        correct_answers=[correct],
        marks=marks,
    )


def add_true_false(exam, marks=5, correct=True):
    return entity_store.create_question(
        exam,
        type=QuestionType.TRUE_FALSE,
        text="The Rhine flows into the North Sea.",
        correct_answers=correct,
        marks=marks,
    )


def add_essay(exam, marks=20, references=None):
    return entity_store.create_question(
        exam,
        type=QuestionType.ESSAY,
        text="Describe the water cycle.",
        correct_answers=references or ["Evaporation, condensation, precipitation"],
        marks=marks,
    )


def expire(submission, minutes_past=1):
    """Startzeit so weit zurücksetzen, dass die Frist abgelaufen ist."""
    started = timezone.now() - datetime.timedelta(minutes=submission.duration + minutes_past)
    Submission.objects.filter(pk=submission.pk).update(start_time=started)
    submission.refresh_from_db()
    return submission
