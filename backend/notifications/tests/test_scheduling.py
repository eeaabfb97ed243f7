from io import StringIO
import json
from unittest import mock
from uuid import uuid4

from django.core import mail
from django.core.management import CommandError, call_command
from django.test import TestCase

from common.tests.factories import make_company, make_failed_notification, make_order
from notifications import tasks
from notifications.models import Notification
from notifications.scheduling import CeleryNotificationScheduler
from notifications.transport import SendResult


class SchedulerTest(TestCase):

    def setUp(self):
        self.order = make_order(make_company())

    def test_nothing_is_queued_before_commit(self):
        with self.captureOnCommitCallbacks() as callbacks:
            CeleryNotificationScheduler().tracking_activated(self.order.id)
        self.assertEqual(len(callbacks), 1)
        self.assertEqual(len(mail.outbox), 0)

    def test_status_update_runs_task_after_commit(self):
        with self.captureOnCommitCallbacks(execute=True):
            CeleryNotificationScheduler().status_update(self.order.id, "DELIVERED", "Signed by Ada")

        self.assertEqual(len(mail.outbox), 1)
        n = Notification.objects.get()
        self.assertEqual(n.type, Notification.Type.STATUS_UPDATE)
        self.assertEqual(n.status, Notification.Status.SENT)

    def test_enqueue_failure_is_logged_and_swallowed(self):
        with mock.patch("notifications.tasks.send_tracking_activated") as task:
            task.delay.side_effect = ConnectionError("broker down")
            with self.assertLogs("notifications.scheduling", level="ERROR"):
                with self.captureOnCommitCallbacks(execute=True):
                    CeleryNotificationScheduler().tracking_activated(self.order.id)
        self.assertEqual(Notification.objects.count(), 0)


class TaskTest(TestCase):

    def test_dispatch_for_deleted_order_is_noop(self):
        tasks.send_tracking_activated(str(uuid4()))
        self.assertEqual(len(mail.outbox), 0)

    def test_retry_task_returns_counts(self):
        make_failed_notification(make_order(make_company()))
        self.assertEqual(tasks.retry_failed_notifications(), {"total": 1, "success": 1, "failed": 0})


class CommandTest(TestCase):

    def test_retry_notifications_json(self):
        make_failed_notification(make_order(make_company()))
        out = StringIO()
        call_command("retry_notifications", "--json", stdout=out)
        self.assertEqual(json.loads(out.getvalue()), {"total": 1, "success": 1, "failed": 0})
        self.assertEqual(Notification.objects.get().status, Notification.Status.SENT)

    def test_retry_notifications_text(self):
        out = StringIO()
        call_command("retry_notifications", stdout=out)
        self.assertIn("Successfully retried 0/0 notifications", out.getvalue())

    def test_send_test_email(self):
        out = StringIO()
        call_command("send_test_email", "ops@example.com", stdout=out)
        self.assertEqual(mail.outbox[0].subject, "Order Fellow - Email Test")
        self.assertIn("Test email sent successfully", out.getvalue())

    def test_send_test_email_failure(self):
        with mock.patch(
            "notifications.transport.DjangoEmailTransport.send",
            return_value=SendResult(success=False, error="auth failed"),
        ):
            with self.assertRaisesMessage(CommandError, "auth failed"):
                call_command("send_test_email", "ops@example.com", stdout=StringIO())
