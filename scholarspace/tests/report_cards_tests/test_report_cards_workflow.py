import datetime
from django.test import TestCase
from scholarspace.report_cards.models.report_card import ReportCard, ReportCardStatus
from scholarspace.report_cards.exceptions import (
    InvalidStatusTransition,
    ReportCardsNotFound,
    NoReportCardsInStatus,
    ReportCardLocked,
    InvalidEffortGrade,
)
from scholarspace.report_cards.utils import workflow
from scholarspace.action_logs.models.action_log import ActionLog, ActionCategory
from scholarspace.action_logs.utils.action_log import set_test_mode
from scholarspace.tests.report_cards_tests.report_cards_factories import (
    ReportCardFactory,
    ReportCardGradeFactory,
)
from scholarspace.tests.report_cards_tests.test_helpers import (
    create_test_school,
    create_test_class,
    create_test_teacher,
)


class WorkflowTestMixin:
    def setUp(self):
        set_test_mode(True)
        self.school, self.admin = create_test_school()
        self.school_class = create_test_class(self.school)

    def tearDown(self):
        set_test_mode(False)

    def _card(self, status=ReportCardStatus.DRAFT, **kwargs):
        kwargs.setdefault("academic_year", "2024")
        kwargs.setdefault("term", 1)
        return ReportCardFactory(school_class=self.school_class, status=status, **kwargs)


class UpdateStatusTest(WorkflowTestMixin, TestCase):
    def test_moves_cards_one_step(self):
        cards = [self._card(), self._card()]

        count = workflow.update_status(
            [c.id for c in cards], ReportCardStatus.REVIEW, actor=self.admin
        )

        self.assertEqual(count, 2)
        self.assertEqual(
            set(ReportCard.objects.values_list("status", flat=True)),
            {ReportCardStatus.REVIEW},
        )

    def test_publishing_stamps_publisher(self):
        card = self._card(ReportCardStatus.REVIEW)

        workflow.update_status([card.id], "PUBLISHED", actor=self.admin)

        card.refresh_from_db()
        self.assertEqual(card.status, ReportCardStatus.PUBLISHED)
        self.assertEqual(card.published_by, self.admin)
        self.assertIsNotNone(card.published_at)

    def test_skipping_a_step_is_rejected(self):
        draft = self._card()
        with self.assertRaises(InvalidStatusTransition) as ctx:
            workflow.update_status([draft.id], ReportCardStatus.PUBLISHED, self.admin)

        self.assertEqual(ctx.exception.blocking_ids, [draft.id])
        draft.refresh_from_db()
        self.assertEqual(draft.status, ReportCardStatus.DRAFT)

    def test_published_cards_cannot_move(self):
        published = self._card(ReportCardStatus.PUBLISHED)
        with self.assertRaises(InvalidStatusTransition):
            workflow.update_status([published.id], ReportCardStatus.DRAFT, self.admin)

    def test_one_blocking_card_stops_the_whole_batch(self):
        draft = self._card()
        review = self._card(ReportCardStatus.REVIEW)

        with self.assertRaises(InvalidStatusTransition) as ctx:
            workflow.update_status([draft.id, review.id], ReportCardStatus.REVIEW)

        self.assertEqual(ctx.exception.blocking_ids, [review.id])
        draft.refresh_from_db()
        self.assertEqual(draft.status, ReportCardStatus.DRAFT)

    def test_missing_ids_are_reported(self):
        draft = self._card()

        with self.assertRaises(ReportCardsNotFound) as ctx:
            workflow.update_status([draft.id, 999999], ReportCardStatus.REVIEW)

        self.assertEqual(ctx.exception.missing_ids, [999999])
        draft.refresh_from_db()
        self.assertEqual(draft.status, ReportCardStatus.DRAFT)

    def test_unknown_status_is_rejected(self):
        draft = self._card()
        with self.assertRaises(InvalidStatusTransition):
            workflow.update_status([draft.id], "ARCHIVED")

    def test_transition_is_audited(self):
        card = self._card()
        ActionLog.objects.all().delete()

        workflow.update_status([card.id], ReportCardStatus.REVIEW, actor=self.admin)

        log = ActionLog.objects.get()
        self.assertEqual(log.category, ActionCategory.UPDATE)
        self.assertEqual(log.metadata["report_card_ids"], [card.id])
        self.assertEqual(log.metadata["new_status"], "REVIEW")

    def test_publishing_is_audited_as_publish(self):
        card = self._card(ReportCardStatus.REVIEW)
        ActionLog.objects.all().delete()

        workflow.update_status([card.id], ReportCardStatus.PUBLISHED, actor=self.admin)

        self.assertEqual(ActionLog.objects.get().category, ActionCategory.PUBLISH)


class CohortTransitionTest(WorkflowTestMixin, TestCase):
    def test_send_for_review_moves_only_drafts(self):
        drafts = [self._card(), self._card()]
        published = self._card(ReportCardStatus.PUBLISHED)
        other_term = self._card(term=2)

        count = workflow.send_for_review(self.school_class.id, "2024", 1, self.admin)

        self.assertEqual(count, 2)
        for card in drafts:
            card.refresh_from_db()
            self.assertEqual(card.status, ReportCardStatus.REVIEW)
        published.refresh_from_db()
        other_term.refresh_from_db()
        self.assertEqual(published.status, ReportCardStatus.PUBLISHED)
        self.assertEqual(other_term.status, ReportCardStatus.DRAFT)

    def test_send_for_review_without_drafts_raises(self):
        self._card(ReportCardStatus.REVIEW)
        with self.assertRaises(NoReportCardsInStatus):
            workflow.send_for_review(self.school_class.id, "2024", 1, self.admin)

    def test_publish_moves_review_cards(self):
        review = self._card(ReportCardStatus.REVIEW)
        draft = self._card()

        count = workflow.publish(self.school_class.id, "2024", 1, self.admin)

        self.assertEqual(count, 1)
        review.refresh_from_db()
        draft.refresh_from_db()
        self.assertEqual(review.status, ReportCardStatus.PUBLISHED)
        self.assertEqual(review.published_by, self.admin)
        self.assertEqual(draft.status, ReportCardStatus.DRAFT)

    def test_publish_without_review_cards_raises(self):
        self._card()
        with self.assertRaises(NoReportCardsInStatus):
            workflow.publish(self.school_class.id, "2024", 1, self.admin)


class DeleteDraftsTest(WorkflowTestMixin, TestCase):
    def test_only_drafts_of_the_cohort_are_deleted(self):
        drafts = [self._card(), self._card()]
        ReportCardGradeFactory(report_card=drafts[0])
        review = self._card(ReportCardStatus.REVIEW)
        published = self._card(ReportCardStatus.PUBLISHED)
        other_year = self._card(academic_year="2023")

        deleted = workflow.delete_draft_report_cards(
            self.school_class.id, "2024", 1, self.admin
        )

        self.assertEqual(deleted, 2)
        remaining = set(ReportCard.objects.values_list("id", flat=True))
        self.assertEqual(remaining, {review.id, published.id, other_year.id})

    def test_nothing_to_delete_returns_zero(self):
        self._card(ReportCardStatus.REVIEW)
        self.assertEqual(
            workflow.delete_draft_report_cards(self.school_class.id, "2024", 1), 0
        )


class SubjectCommentTest(WorkflowTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.teacher = create_test_teacher(self.school)
        self.card = self._card(ReportCardStatus.REVIEW)
        self.grade = ReportCardGradeFactory(report_card=self.card, teacher=self.teacher)

    def test_updates_comment_and_effort_grade(self):
        grade = workflow.update_subject_comment(
            self.grade.id, "Works hard in class", "b", actor=self.teacher
        )

        grade.refresh_from_db()
        self.assertEqual(grade.teacher_comment, "Works hard in class")
        self.assertEqual(grade.effort_grade, "B")

    def test_blank_effort_grade_clears_it(self):
        self.grade.effort_grade = "A"
        self.grade.save()

        grade = workflow.update_subject_comment(self.grade.id, "", "")

        grade.refresh_from_db()
        self.assertIsNone(grade.effort_grade)

    def test_omitted_fields_are_left_alone(self):
        workflow.update_subject_comment(self.grade.id, "Good effort", "C")

        workflow.update_subject_comment(self.grade.id, effort_grade="A")
        self.grade.refresh_from_db()
        self.assertEqual(self.grade.teacher_comment, "Good effort")
        self.assertEqual(self.grade.effort_grade, "A")

        workflow.update_subject_comment(self.grade.id, teacher_comment="Excellent")
        self.grade.refresh_from_db()
        self.assertEqual(self.grade.teacher_comment, "Excellent")
        self.assertEqual(self.grade.effort_grade, "A")

    def test_invalid_effort_grade_is_rejected(self):
        with self.assertRaises(InvalidEffortGrade):
            workflow.update_subject_comment(self.grade.id, "Fine", "F")
        self.grade.refresh_from_db()
        self.assertIsNone(self.grade.teacher_comment)

    def test_published_card_is_locked(self):
        ReportCard.objects.filter(id=self.card.id).update(
            status=ReportCardStatus.PUBLISHED
        )
        with self.assertRaises(ReportCardLocked):
            workflow.update_subject_comment(self.grade.id, "Late edit", "A")


class UpdateReportCardTest(WorkflowTestMixin, TestCase):
    def test_only_admin_fields_are_written(self):
        card = self._card(overall_average=60.0)

        workflow.update_report_card(
            card.id,
            {
                "principal_comment": "A promising term",
                "conduct_grade": "Good",
                "next_term_begins": datetime.date(2024, 5, 6),
                "overall_average": 99.0,
            },
            actor=self.admin,
        )

        card.refresh_from_db()
        self.assertEqual(card.principal_comment, "A promising term")
        self.assertEqual(card.conduct_grade, "Good")
        self.assertEqual(card.next_term_begins, datetime.date(2024, 5, 6))
        self.assertEqual(card.overall_average, 60.0)

    def test_published_card_is_locked(self):
        card = self._card(ReportCardStatus.PUBLISHED)
        with self.assertRaises(ReportCardLocked):
            workflow.update_report_card(card.id, {"principal_comment": "Too late"})


class ReadersTest(WorkflowTestMixin, TestCase):
    def test_student_sees_only_published_cards(self):
        published = self._card(ReportCardStatus.PUBLISHED)
        self._card(ReportCardStatus.REVIEW, student=published.student, term=2)

        cards = list(workflow.get_report_cards_for_student(published.student_id))

        self.assertEqual(cards, [published])

    def test_teacher_review_cards_contain_only_their_subjects(self):
        teacher = create_test_teacher(self.school)
        other_teacher = create_test_teacher(self.school)
        review = self._card(ReportCardStatus.REVIEW)
        mine = ReportCardGradeFactory(
            report_card=review, teacher=teacher, subject_name="Chemistry"
        )
        ReportCardGradeFactory(report_card=review, teacher=other_teacher)
        draft = self._card()
        ReportCardGradeFactory(report_card=draft, teacher=teacher)

        cards = workflow.get_teacher_review_cards(teacher.id)

        self.assertEqual(len(cards), 1)
        self.assertEqual(cards[0]["report_card_id"], review.id)
        self.assertEqual([s["id"] for s in cards[0]["subjects"]], [mine.id])
        self.assertEqual(cards[0]["subjects"][0]["subject_name"], "Chemistry")
