from django.contrib.contenttypes.models import ContentType
from django.test import TestCase
from scholarspace.action_logs.models.action_log import (
    ActionLog,
    ActionCategory,
    SYSTEM_USER_TAG,
)
from scholarspace.tests.action_logs_tests.test_helpers import (
    create_test_school,
    create_test_class,
)


class ActionLogModelTest(TestCase):
    def setUp(self):
        self.school, self.admin_user = create_test_school()

    def test_user_tag_is_taken_from_user(self):
        log = ActionLog.objects.create(
            user=self.admin_user, action="Published", category=ActionCategory.UPDATE
        )
        self.assertEqual(log.user_tag, self.admin_user.user_tag)

    def test_system_entries_keep_zero_tag(self):
        log = ActionLog.objects.create(action="Ranked", category=ActionCategory.SYSTEM)
        self.assertEqual(log.user_tag, SYSTEM_USER_TAG)
        self.assertIsNone(log.affected_model)
        self.assertIsNone(log.affected_object)

    def test_affected_object(self):
        school_class = create_test_class(self.school)
        log = ActionLog.objects.create(
            action="Generated",
            category=ActionCategory.CREATE,
            content_type=ContentType.objects.get_for_model(school_class),
            object_id=school_class.id,
        )
        self.assertEqual(log.affected_model, "SchoolClass")
        self.assertEqual(log.affected_object, str(school_class))

    def test_str(self):
        log = ActionLog.objects.create(
            user=self.admin_user, action="Deleted drafts", category=ActionCategory.DELETE
        )
        self.assertEqual(str(log), f"{self.admin_user.user_tag} - Delete - Deleted drafts")
