"""
Tests für den Lebenszyklus eines Prüfungsversuchs:
Starten, Antworten abgeben, Abschließen und Fristablauf.
"""

from django.test import TestCase, override_settings

from examination.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    SubmissionExpiredError,
    ValidationError,
)
from examination.services.store import entity_store
from examination.services.submissions import submission_service
from examination.submissions.models import Answer, Submission
from examination.tests.helpers import (
    add_essay,
    add_multiple_choice,
    add_true_false,
    expire,
    make_exam,
    make_user,
)


class SubmissionFlowTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.creator = make_user("lehrer")
        cls.student = make_user("schueler")
        cls.stranger = make_user("fremder")
        cls.exam = make_exam(cls.creator, duration=30)
        cls.mc = add_multiple_choice(cls.exam, marks=10)
        cls.tf = add_true_false(cls.exam, marks=5, correct=True)
        cls.essay = add_essay(cls.exam, marks=20)

    def start(self, user=None):
        return submission_service.create_submission(self.exam.pk, (user or self.student).pk)

    def testObjectiveExamScenario(self):
        exam = make_exam(self.creator, duration=30)
        question = add_multiple_choice(exam, marks=10)

        submission = submission_service.create_submission(exam.pk, self.student.pk)
        answer = submission_service.submit_answer(submission.pk, question.pk, "0", self.student.pk)
        self.assertTrue(answer.is_correct)
        self.assertEqual(answer.score, 10)

        submission = submission_service.complete_submission(submission.pk, self.student.pk)
        self.assertTrue(submission.completed)
        self.assertEqual(submission.score, 10)
        self.assertIsNotNone(submission.end_time)

    def testNewSubmissionIsInProgress(self):
        submission = self.start()
        self.assertFalse(submission.completed)
        self.assertIsNone(submission.end_time)
        self.assertIsNone(submission.score)
        self.assertEqual(submission.status, Submission.Status.IN_PROGRESS)
        self.assertEqual(submission.user_id, self.student.pk)

    def testStartUnknownExam(self):
        with self.assertRaises(NotFoundError):
            submission_service.create_submission(9999, self.student.pk)

    def testScoreIsSumOfAnswerScores(self):
        submission = self.start()
        submission_service.submit_answer(submission.pk, self.mc.pk, "0", self.student.pk)
        submission_service.submit_answer(submission.pk, self.tf.pk, False, self.student.pk)
        submission_service.submit_answer(submission.pk, self.essay.pk, "Wasser verdunstet", self.student.pk)

        submission = submission_service.complete_submission(submission.pk, self.student.pk)
        scores = [a.score for a in Answer.objects.filter(submission=submission)]
        self.assertEqual(sorted(scores), [0, 0, 10])
        self.assertEqual(submission.score, sum(scores))

    def testCompleteWithoutAnswersScoresZero(self):
        submission = submission_service.complete_submission(self.start().pk, self.student.pk)
        self.assertEqual(submission.score, 0)

    def testSecondCompleteIsRejected(self):
        submission = self.start()
        submission_service.submit_answer(submission.pk, self.mc.pk, "0", self.student.pk)
        first = submission_service.complete_submission(submission.pk, self.student.pk)

        with self.assertRaises(ConflictError):
            submission_service.complete_submission(submission.pk, self.student.pk)

        submission.refresh_from_db()
        self.assertEqual(submission.score, first.score)
        self.assertEqual(submission.end_time, first.end_time)

    def testReAnswerOverwrites(self):
        submission = self.start()
        submission_service.submit_answer(submission.pk, self.mc.pk, "0", self.student.pk)
        submission_service.submit_answer(submission.pk, self.mc.pk, "1", self.student.pk)

        answers = Answer.objects.filter(submission=submission, question=self.mc)
        self.assertEqual(answers.count(), 1)
        answer = answers.get()
        self.assertEqual(answer.answer, "1")
        self.assertFalse(answer.is_correct)
        self.assertEqual(answer.score, 0)

    def testAnswerAfterCompletionIsRejected(self):
        submission = self.start()
        submission_service.complete_submission(submission.pk, self.student.pk)
        with self.assertRaises(ConflictError):
            submission_service.submit_answer(submission.pk, self.mc.pk, "0", self.student.pk)
        self.assertFalse(Answer.objects.filter(submission=submission).exists())

    def testQuestionFromOtherExamIsRejected(self):
        other_exam = make_exam(self.creator)
        foreign = add_true_false(other_exam)
        submission = self.start()
        with self.assertRaises(ValidationError):
            submission_service.submit_answer(submission.pk, foreign.pk, True, self.student.pk)

    def testMalformedAnswerIsRejected(self):
        submission = self.start()
        with self.assertRaises(ValidationError):
            submission_service.submit_answer(submission.pk, self.tf.pk, "vielleicht", self.student.pk)
        self.assertFalse(Answer.objects.filter(submission=submission).exists())

    def testRawAnswerIsStored(self):
        submission = self.start()
        answer = submission_service.submit_answer(submission.pk, self.mc.pk, ["0"], self.student.pk)
        answer.refresh_from_db()
        self.assertEqual(answer.answer, ["0"])
        self.assertTrue(answer.is_correct)


class SubmissionAuthorizationTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.creator = make_user("lehrer")
        cls.owner = make_user("userA")
        cls.other = make_user("userB")
        cls.exam = make_exam(cls.creator)
        cls.question = add_multiple_choice(cls.exam)

    def setUp(self):
        self.submission = submission_service.create_submission(self.exam.pk, self.owner.pk)

    def testUnauthorizedCompletion(self):
        with self.assertRaises(AuthorizationError):
            submission_service.complete_submission(self.submission.pk, self.other.pk)
        self.submission.refresh_from_db()
        self.assertFalse(self.submission.completed)
        self.assertIsNone(self.submission.end_time)

    def testOnlyOwnerMayAnswer(self):
        for caller in (self.other, self.creator):
            with self.subTest(caller=caller.username):
                with self.assertRaises(AuthorizationError):
                    submission_service.submit_answer(self.submission.pk, self.question.pk, "0", caller.pk)
        self.assertFalse(Answer.objects.exists())

    def testCreatorMayNotComplete(self):
        with self.assertRaises(AuthorizationError):
            submission_service.complete_submission(self.submission.pk, self.creator.pk)

    def testViewingAnswers(self):
        submission_service.submit_answer(self.submission.pk, self.question.pk, "0", self.owner.pk)
        self.assertEqual(submission_service.get_answers(self.submission.pk, self.owner.pk).count(), 1)
        self.assertEqual(submission_service.get_answers(self.submission.pk, self.creator.pk).count(), 1)
        with self.assertRaises(AuthorizationError):
            submission_service.get_answers(self.submission.pk, self.other.pk)
        with self.assertRaises(AuthorizationError):
            submission_service.get_submission(self.submission.pk, self.other.pk)

    def testCreatorListsSubmissions(self):
        submissions = submission_service.list_exam_submissions(self.exam.pk, self.creator.pk)
        self.assertEqual([s.pk for s in submissions], [self.submission.pk])
        with self.assertRaises(AuthorizationError):
            submission_service.list_exam_submissions(self.exam.pk, self.owner.pk)

    def testUserSubmissions(self):
        self.assertEqual(submission_service.list_user_submissions(self.owner.pk).count(), 1)
        self.assertEqual(submission_service.list_user_submissions(self.other.pk).count(), 0)


class SingleActiveSubmissionTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.creator = make_user("lehrer")
        cls.student = make_user("schueler")
        cls.exam = make_exam(cls.creator, duration=30)

    def testSecondActiveAttemptIsRejected(self):
        first = submission_service.create_submission(self.exam.pk, self.student.pk)
        with self.assertRaises(ConflictError) as ctx:
            submission_service.create_submission(self.exam.pk, self.student.pk)
        self.assertEqual(ctx.exception.details["submission_id"], first.pk)
        self.assertEqual(Submission.objects.filter(exam=self.exam).count(), 1)

    def testNewAttemptAfterCompletion(self):
        first = submission_service.create_submission(self.exam.pk, self.student.pk)
        submission_service.complete_submission(first.pk, self.student.pk)
        second = submission_service.create_submission(self.exam.pk, self.student.pk)
        self.assertNotEqual(first.pk, second.pk)

    def testExpiredAttemptIsClosedOnRestart(self):
        first = expire(submission_service.create_submission(self.exam.pk, self.student.pk))
        second = submission_service.create_submission(self.exam.pk, self.student.pk)
        first.refresh_from_db()
        self.assertTrue(first.completed)
        self.assertEqual(first.score, 0)
        self.assertFalse(second.completed)

    @override_settings(EXAM_SINGLE_ACTIVE_SUBMISSION=False)
    def testParallelAttemptsWhenDisabled(self):
        submission_service.create_submission(self.exam.pk, self.student.pk)
        submission_service.create_submission(self.exam.pk, self.student.pk)
        self.assertEqual(Submission.objects.filter(exam=self.exam, completed=False).count(), 2)


class DeadlineTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.creator = make_user("lehrer")
        cls.student = make_user("schueler")
        cls.exam = make_exam(cls.creator, duration=10)
        cls.question = add_true_false(cls.exam, marks=5)

    def setUp(self):
        self.submission = submission_service.create_submission(self.exam.pk, self.student.pk)

    def testAnswerAfterDeadlineIsRejected(self):
        expire(self.submission)
        with self.assertRaises(SubmissionExpiredError) as ctx:
            submission_service.submit_answer(self.submission.pk, self.question.pk, True, self.student.pk)
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertFalse(Answer.objects.filter(submission=self.submission).exists())
        self.submission.refresh_from_db()
        self.assertFalse(self.submission.completed)

    @override_settings(EXAM_DEADLINE_GRACE_SECONDS=300)
    def testGracePeriod(self):
        expire(self.submission, minutes_past=1)
        answer = submission_service.submit_answer(self.submission.pk, self.question.pk, True, self.student.pk)
        self.assertEqual(answer.score, 5)

    def testCompleteAfterDeadlineKeepsAnswers(self):
        submission_service.submit_answer(self.submission.pk, self.question.pk, True, self.student.pk)
        expire(self.submission)
        submission = submission_service.complete_submission(self.submission.pk, self.student.pk)
        self.assertEqual(submission.score, 5)

    def testRemainingSeconds(self):
        self.assertGreater(self.submission.remaining_seconds, 0)
        self.assertLessEqual(self.submission.remaining_seconds, 600)
        expire(self.submission)
        self.assertEqual(self.submission.remaining_seconds, 0)

    def testDeadlineIgnoresLaterDurationChange(self):
        deadline = self.submission.deadline
        entity_store.update_exam(self.exam.pk, duration=1)
        submission = entity_store.get_submission(self.submission.pk)
        self.assertEqual(submission.duration, 10)
        self.assertEqual(submission.deadline, deadline)

        answer = submission_service.submit_answer(submission.pk, self.question.pk, True, self.student.pk)
        self.assertEqual(answer.score, 5)

    def testCloseExpiredSubmissions(self):
        submission_service.submit_answer(self.submission.pk, self.question.pk, True, self.student.pk)
        other = make_user("zweiter")
        running = submission_service.create_submission(self.exam.pk, other.pk)
        expire(self.submission)

        self.assertEqual(submission_service.close_expired_submissions(), 1)
        self.submission.refresh_from_db()
        running.refresh_from_db()
        self.assertTrue(self.submission.completed)
        self.assertEqual(self.submission.score, 5)
        self.assertFalse(running.completed)
        self.assertEqual(submission_service.close_expired_submissions(), 0)


class ExamResultsTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.creator = make_user("lehrer", name="Frau Lehrer")
        cls.student = make_user("schueler", name="Max Muster")
        cls.exam = make_exam(cls.creator)
        cls.mc = add_multiple_choice(cls.exam, marks=10)
        cls.essay = add_essay(cls.exam, marks=20)

    def testResultsSummary(self):
        submission = submission_service.create_submission(self.exam.pk, self.student.pk)
        submission_service.submit_answer(submission.pk, self.mc.pk, "0", self.student.pk)
        submission_service.submit_answer(submission.pk, self.essay.pk, "Text", self.student.pk)
        submission_service.complete_submission(submission.pk, self.student.pk)

        results = submission_service.exam_results(self.exam.pk, self.creator.pk)
        self.assertEqual(len(results), 1)
        row = results[0]
        self.assertEqual(row["name"], "Max Muster")
        self.assertEqual(row["score"], 10)
        self.assertEqual(row["max_score"], 30)
        self.assertEqual(row["answered"], 2)
        self.assertEqual(row["needs_review"], 1)
        self.assertEqual(row["pending_review_requests"], 0)

    def testResultsOnlyForCreator(self):
        with self.assertRaises(AuthorizationError):
            submission_service.exam_results(self.exam.pk, self.student.pk)
