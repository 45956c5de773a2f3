"""
Tests für den Entity Store: Benutzer, Prüfungen und Fragen.
"""

from django.test import TestCase, override_settings

from examination.exams.models import Exam, QuestionType
from examination.exceptions import ConflictError, NotFoundError, ValidationError
from examination.services.store import entity_store
from examination.services.store.entity_store import EXAM_CODE_ALPHABET
from examination.services.submissions import submission_service
from examination.tests.helpers import add_essay, add_multiple_choice, add_true_false, make_exam, make_user


class UserStoreTests(TestCase):
    def testCreateUserHashesPasswordAndStoresName(self):
        user = entity_store.create_user("anna", "Anna Schmidt", "anna@test.com", "Geheim-12345")
        self.assertNotEqual(user.password, "Geheim-12345")
        self.assertTrue(user.check_password("Geheim-12345"))
        self.assertEqual(user.profile.name, "Anna Schmidt")
        self.assertEqual(entity_store.get_user_by_username("anna").pk, user.pk)
        self.assertEqual(entity_store.get_user_by_email("ANNA@test.com").pk, user.pk)

    def testDuplicateUsernameOrEmailIsRejected(self):
        entity_store.create_user("anna", "Anna", "anna@test.com", "Geheim-12345")
        with self.assertRaises(ValidationError):
            entity_store.create_user("anna", "Other", "other@test.com", "Geheim-12345")
        with self.assertRaises(ValidationError):
            entity_store.create_user("anna2", "Other", "Anna@Test.com", "Geheim-12345")

    def testUnknownUserRaisesNotFound(self):
        with self.assertRaises(NotFoundError) as ctx:
            entity_store.get_user(9999)
        self.assertEqual(ctx.exception.details["resource_type"], "User")


class ExamStoreTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.creator = make_user("lehrer")

    def testCreateExamAssignsCode(self):
        exam = make_exam(self.creator)
        self.assertGreaterEqual(len(exam.code), 8)
        self.assertTrue(all(c in EXAM_CODE_ALPHABET for c in exam.code))
        self.assertEqual(entity_store.get_exam_by_code(exam.code).pk, exam.pk)

    def testExamCodesAreUnique(self):
        codes = {make_exam(self.creator).code for _ in range(20)}
        self.assertEqual(len(codes), 20)

    @override_settings(EXAM_CODE_LENGTH=12)
    def testCodeLengthIsConfigurable(self):
        self.assertEqual(len(make_exam(self.creator).code), 12)

    def testInvalidExamIsRejected(self):
        with self.assertRaises(ValidationError):
            entity_store.create_exam(self.creator, title="", subject="Mathe", duration=30)
        with self.assertRaises(ValidationError):
            entity_store.create_exam(self.creator, title="Algebra", subject="Mathe", duration=0)
        self.assertEqual(Exam.objects.count(), 0)

    def testUpdateExamIsPartial(self):
        exam = make_exam(self.creator, duration=30)
        updated = entity_store.update_exam(exam.pk, duration=45)
        self.assertEqual(updated.duration, 45)
        self.assertEqual(updated.title, "Geographie")
        self.assertEqual(updated.code, exam.code)

    def testImmutableFieldsCannotBeUpdated(self):
        exam = make_exam(self.creator)
        with self.assertRaises(ValidationError):
            entity_store.update_exam(exam.pk, code="NEWCODE1")

    def testExamsByCreator(self):
        other = make_user("kollege")
        make_exam(self.creator)
        make_exam(self.creator)
        make_exam(other)
        self.assertEqual(entity_store.get_exams_by_creator(self.creator.pk).count(), 2)

    def testDeleteExamRemovesQuestions(self):
        exam = make_exam(self.creator)
        question = add_true_false(exam)
        entity_store.delete_exam(exam.pk)
        with self.assertRaises(NotFoundError):
            entity_store.get_question(question.pk)


class QuestionStoreTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.creator = make_user("lehrer")

    def setUp(self):
        self.exam = make_exam(self.creator)

    def testQuestionsAreOrdered(self):
        essay = entity_store.create_question(
            self.exam, type=QuestionType.ESSAY, text="Essay", correct_answers=["ref"], marks=5, order=3
        )
        mc = add_multiple_choice(self.exam)
        tf = entity_store.create_question(
            self.exam, type=QuestionType.TRUE_FALSE, text="TF", correct_answers=False, order=2
        )
        self.assertEqual(mc.order, 4)
        ordered = list(entity_store.get_questions_by_exam(self.exam.pk))
        self.assertEqual(ordered, [tf, essay, mc])

    def testDefaultOrderAndMarks(self):
        first = add_true_false(self.exam)
        second = entity_store.create_question(
            self.exam, type=QuestionType.TRUE_FALSE, text="TF", correct_answers=True
        )
        self.assertEqual((first.order, second.order), (1, 2))
        self.assertEqual(second.marks, 1)

    def testDuplicateOrderIsRejected(self):
        add_true_false(self.exam)
        with self.assertRaises(ValidationError):
            entity_store.create_question(
                self.exam, type=QuestionType.TRUE_FALSE, text="TF", correct_answers=True, order=1
            )

    def testAnswerKeyIsStoredCanonically(self):
        question = entity_store.create_question(
            self.exam,
            type=QuestionType.MULTIPLE_CHOICE,
            text="Capital?",
            options=["Paris", "Lyon"],
            correct_answers=[0],
        )
        question.refresh_from_db()
        self.assertEqual(question.correct_answers, ["0"])

    def testInvalidQuestionIsRejected(self):
        with self.assertRaises(ValidationError):
            add_multiple_choice(self.exam, options=["Paris"])
        with self.assertRaises(ValidationError):
            add_essay(self.exam, marks=0)
        self.assertEqual(self.exam.questions.count(), 0)

    def testUpdateQuestionRevalidatesMergedState(self):
        question = add_true_false(self.exam)
        updated = entity_store.update_question(question.pk, marks=7, correct_answers="false")
        self.assertEqual(updated.marks, 7)
        self.assertIs(updated.correct_answers, False)

        # Typwechsel ohne passende Optionen
        with self.assertRaises(ValidationError):
            entity_store.update_question(question.pk, type=QuestionType.MULTIPLE_CHOICE)
        question.refresh_from_db()
        self.assertEqual(question.type, QuestionType.TRUE_FALSE)

    def testTotalMarks(self):
        add_multiple_choice(self.exam, marks=10)
        add_essay(self.exam, marks=20)
        self.assertEqual(self.exam.total_marks, 30)


class AnsweredQuestionTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.creator = make_user("lehrer")
        cls.student = make_user("schueler")
        cls.other = make_user("zweiter")

    def setUp(self):
        self.exam = make_exam(self.creator)
        self.mc = add_multiple_choice(self.exam, marks=10)
        self.tf = add_true_false(self.exam, marks=5, correct=True)

    def answer_all(self, user, complete=True):
        submission = submission_service.create_submission(self.exam.pk, user.pk)
        submission_service.submit_answer(submission.pk, self.mc.pk, "0", user.pk)
        submission_service.submit_answer(submission.pk, self.tf.pk, True, user.pk)
        if complete:
            submission = submission_service.complete_submission(submission.pk, user.pk)
        return submission

    def testDeleteQuestionRecomputesCompletedScores(self):
        completed = self.answer_all(self.student)
        running = self.answer_all(self.other, complete=False)
        self.assertEqual(completed.score, 15)

        entity_store.delete_question(self.mc.pk)

        completed.refresh_from_db()
        self.assertEqual(completed.score, 5)
        self.assertEqual(completed.score, completed.current_total())
        running.refresh_from_db()
        self.assertIsNone(running.score)

        row = submission_service.exam_results(self.exam.pk, self.creator.pk)
        row = next(r for r in row if r["submission_id"] == completed.pk)
        self.assertEqual((row["score"], row["max_score"]), (5, 5))

    def testGradingOfAnsweredQuestionIsFrozen(self):
        self.answer_all(self.student)
        changes = (
            {"marks": 1},
            {"correct_answers": ["2"]},
            {"options": ["Paris", "Lyon", "Nice", "Metz"]},
            {"type": QuestionType.ESSAY, "options": None, "correct_answers": ["Paris"]},
        )
        for fields in changes:
            with self.subTest(fields=fields):
                with self.assertRaises(ConflictError):
                    entity_store.update_question(self.mc.pk, **fields)
        self.mc.refresh_from_db()
        self.assertEqual((self.mc.marks, self.mc.correct_answers), (10, ["0"]))

    def testTextAndOrderStayEditable(self):
        self.answer_all(self.student)
        updated = entity_store.update_question(self.mc.pk, text="Capital of France?", order=5, marks=10)
        self.assertEqual((updated.text, updated.order, updated.marks), ("Capital of France?", 5, 10))
